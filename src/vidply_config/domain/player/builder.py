"""
Player configuration builder.

Classifies resolved tracks into a single-item or playlist configuration and
derives the asset loading flags used by rendering. Pure function of its
inputs: identical inputs always give an identical configuration.
"""

from typing import Optional, Sequence

from ..media.models import (
    EXTERNAL_SERVICE_TYPES,
    HLS_TYPES,
    STREAM_URL_TYPES,
    TextTrack,
    Track,
)
from .models import (
    SIGN_LANGUAGE_POSITION,
    AccessibilityTrack,
    AudioDescriptionTrack,
    Dimensions,
    MediaFile,
    PlayerConfiguration,
    PlayerOptions,
    PlaylistData,
    PlaylistOptions,
)

UNIQUE_ID_PREFIX = "vidply-"


def make_unique_id(content_uid: int) -> str:
    """Stable per-instance id so repeated renders initialize idempotently."""
    return f"{UNIQUE_ID_PREFIX}{content_uid}"


def needs_hls(tracks: Sequence[Track]) -> bool:
    """Whether any track is an HLS stream (declared type or MPEG-URL MIME)."""
    return any((track.type or "").lower() in HLS_TYPES for track in tracks)


def external_service_types(tracks: Sequence[Track]) -> tuple[str, ...]:
    """External services used, in order of first appearance."""
    services: list[str] = []
    for track in tracks:
        if track.type in EXTERNAL_SERVICE_TYPES and track.type not in services:
            services.append(track.type)
    return tuple(services)


def split_text_tracks(
    text_tracks: Sequence[TextTrack],
) -> tuple[tuple[TextTrack, ...], tuple[TextTrack, ...]]:
    """Split into (captions, chapters).

    There is a single text track panel, so every non-chapter kind,
    descriptions included, goes to captions.
    """
    captions = tuple(t for t in text_tracks if t.kind != "chapters")
    chapters = tuple(t for t in text_tracks if t.kind == "chapters")
    return captions, chapters


def _single_item_fields(track: Track, options: PlayerOptions) -> dict:
    fields: dict = {}
    option_updates: dict = {}

    if track.type in STREAM_URL_TYPES:
        fields["video_url"] = track.src
    elif track.sources and len(track.sources) > 1:
        # Multi-source element; mediaFiles stays empty to avoid duplicates
        fields["sources"] = track.sources
    else:
        fields["media_files"] = (
            MediaFile(public_url=track.src, mime_type=track.type, label="Default"),
        )

    if track.poster:
        fields["poster"] = track.poster
        option_updates["poster"] = track.poster

    fields["captions"], fields["chapters"] = split_text_tracks(track.text_tracks)

    if track.audio_description_src:
        fields["audio_description_tracks"] = (
            AudioDescriptionTrack(
                src=track.audio_description_src,
                lang="",
                label="Audio Description",
                mime_type="",
            ),
        )
        option_updates["audio_description_src"] = track.audio_description_src
        option_updates["audio_description_button"] = True

    if track.sign_language_src:
        fields["sign_language_tracks"] = (
            AccessibilityTrack(
                src=track.sign_language_src, lang="", label="Sign Language"
            ),
        )
        option_updates["sign_language_src"] = track.sign_language_src
        option_updates["sign_language_button"] = True
        option_updates["sign_language_position"] = SIGN_LANGUAGE_POSITION

    fields["options"] = options.model_copy(update=option_updates)
    return fields


def build(
    tracks: Sequence[Track],
    options: Optional[PlayerOptions] = None,
    dimensions: Optional[Dimensions] = None,
    content_uid: int = 0,
) -> PlayerConfiguration:
    """Build the player configuration for a content item.

    Args:
        tracks: Resolved tracks in display order
        options: Decoded player options
        dimensions: Player width/height
        content_uid: Identifier of the content item

    Returns:
        PlayerConfiguration. With no tracks it is flagged ``is_empty``;
        with one track the single-item fields are set; with two or more
        ``playlist_data`` is set instead.
    """
    tracks = tuple(tracks)
    options = options or PlayerOptions()
    dimensions = dimensions or Dimensions()

    first = tracks[0] if tracks else None
    is_playlist = len(tracks) > 1

    service_type = (
        first.type if first is not None and first.type in EXTERNAL_SERVICE_TYPES else None
    )
    services = external_service_types(tracks)
    has_external_media = bool(services)

    # Declared record type; type holds the resolved MIME type for local files
    declared_type = (first.media_type or first.type) if first is not None else ""
    media_type = "audio" if declared_type == "audio" else "video"

    needs_privacy_layer = service_type is not None
    needs_vid_play_engine = not needs_privacy_layer

    fields: dict = {
        "unique_id": make_unique_id(content_uid),
        "is_empty": not tracks,
        "media_type": media_type,
        "service_type": service_type,
        "needs_privacy_layer": needs_privacy_layer,
        "needs_vid_play_engine": needs_vid_play_engine,
        "needs_playlist_module": is_playlist or needs_vid_play_engine,
        "needs_hls_module": needs_hls(tracks),
        "dimensions": dimensions,
        "options": options,
        "language_selection": options.language,
        "tracks": tracks,
        "has_external_media": has_external_media,
        "external_service_types": services,
        "is_mixed_playlist": is_playlist and has_external_media,
    }

    if is_playlist:
        fields["playlist_data"] = PlaylistData(
            tracks=tracks,
            options=PlaylistOptions(
                autoplay=options.autoplay,
                auto_advance=options.auto_advance,
                loop=options.loop,
                show_panel=True,
                is_mixed_playlist=fields["is_mixed_playlist"],
                has_external_media=has_external_media,
                external_service_types=services,
            ),
        )
    elif first is not None:
        fields.update(_single_item_fields(first, options))

    return PlayerConfiguration(**fields)
