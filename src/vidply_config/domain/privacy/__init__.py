"""Privacy domain - consent layer texts for third-party embeds."""

from .models import PrivacySettings, PrivacySettingsRecord, pick_settings_record
from .settings import (
    DEFAULT_LABELS,
    POLICY_LINKS,
    Translator,
    default_translate,
    fallback_settings,
    get_settings_for_service,
)

__all__ = [
    "PrivacySettings",
    "PrivacySettingsRecord",
    "pick_settings_record",
    "DEFAULT_LABELS",
    "POLICY_LINKS",
    "Translator",
    "default_translate",
    "fallback_settings",
    "get_settings_for_service",
]
