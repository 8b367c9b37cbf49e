"""
Content element processing for the VidPly player.

Entry point called once per render of a content item: decodes the stored
settings, resolves the item's media records into tracks, builds the player
configuration and attaches privacy layer texts for external services.
"""

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from loguru import logger

from vidply_config.core.config import Config, PlayerDefaults
from vidply_config.domain.media import FileLookup, MediaRecord, resolve_tracks
from vidply_config.domain.player import (
    Dimensions,
    PlayerConfiguration,
    build,
    decode_options,
)
from vidply_config.domain.privacy import (
    PrivacySettings,
    PrivacySettingsRecord,
    Translator,
    get_settings_for_service,
)


def _int_or_default(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def read_dimensions(
    content: Mapping[str, Any], defaults: Optional[PlayerDefaults] = None
) -> Dimensions:
    """Width/height of the content item, falling back to configured defaults."""
    defaults = defaults or PlayerDefaults()
    return Dimensions(
        width=_int_or_default(content.get("tx_mpcvidply_width"), defaults.default_width),
        height=_int_or_default(content.get("tx_mpcvidply_height"), defaults.default_height),
    )


def load_privacy_settings(
    configuration: PlayerConfiguration,
    privacy_records: Iterable[PrivacySettingsRecord],
    language_id: int = 0,
    translate: Optional[Translator] = None,
) -> dict[str, PrivacySettings]:
    """Privacy texts for the single service, or every service in a playlist."""
    if configuration.service_type is not None:
        services: tuple[str, ...] = (configuration.service_type,)
    elif configuration.is_playlist and configuration.has_external_media:
        services = configuration.external_service_types
    else:
        return {}

    records = list(privacy_records)
    settings: dict[str, PrivacySettings] = {}
    for service in services:
        try:
            settings[service] = get_settings_for_service(
                service, records, language_id, translate
            )
        except Exception:
            logger.exception(f"Could not load privacy settings for {service}")
    return settings


def process_content(
    content: Mapping[str, Any],
    records: Iterable[MediaRecord],
    file_lookup: FileLookup,
    config: Optional[Config] = None,
    privacy_records: Iterable[PrivacySettingsRecord] = (),
    language_id: int = 0,
    translate: Optional[Translator] = None,
) -> PlayerConfiguration:
    """Build the player configuration for one content item.

    Args:
        content: Content item row (uid and tx_mpcvidply_* settings)
        records: Media records in display order
        file_lookup: File abstraction layer for attached files
        config: Loaded configuration (defaults when omitted)
        privacy_records: Site-wide privacy settings records
        language_id: Current frontend language
        translate: Label lookup for privacy text fallbacks

    Returns:
        PlayerConfiguration, never raises for incomplete content
    """
    config = config or Config()
    content_uid = _int_or_default(content.get("uid"), 0)

    options = decode_options(
        content.get("tx_mpcvidply_options"),
        volume=content.get("tx_mpcvidply_volume"),
        playback_speed=content.get("tx_mpcvidply_playback_speed"),
        language=content.get("tx_mpcvidply_language"),
        defaults=config.player,
    )
    dimensions = read_dimensions(content, config.player)

    tracks = resolve_tracks(records, file_lookup)
    configuration = build(tracks, options, dimensions, content_uid=content_uid)
    logger.debug(
        f"Content {content_uid}: {len(tracks)} track(s), "
        f"playlist={configuration.is_playlist}, service={configuration.service_type}"
    )

    privacy_settings = load_privacy_settings(
        configuration, privacy_records, language_id, translate
    )
    if not privacy_settings:
        return configuration
    # model_copy skips validation, freeze here
    return configuration.model_copy(
        update={"privacy_settings": MappingProxyType(privacy_settings)}
    )
