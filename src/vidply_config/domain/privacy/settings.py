"""
Privacy layer settings for external services (YouTube, Vimeo, SoundCloud).

Site-wide texts come from the privacy settings records; anything missing
falls back to label defaults for the requested language.
"""

from typing import Callable, Iterable, Optional

from .models import PrivacySettings, PrivacySettingsRecord, pick_settings_record

# translate(label_key, language_id) -> text
Translator = Callable[[str, int], str]

DEFAULT_LABELS = {
    "privacy.activate_intro": (
        "This video is provided by an external service. When you load it, "
        "data is transmitted to that provider."
    ),
    "privacy.activate_intro_widget": (
        "This audio widget is provided by an external service. When you load it, "
        "data is transmitted to that provider."
    ),
    "privacy.activate_outro": "More information can be found in the privacy policy of",
    "privacy.youtube.policy_link": "YouTube",
    "privacy.vimeo.policy_link": "Vimeo",
    "privacy.soundcloud.policy_link": "SoundCloud",
}

POLICY_LINKS = {
    "youtube": "https://policies.google.com/privacy",
    "vimeo": "https://vimeo.com/privacy",
    "soundcloud": "https://soundcloud.com/pages/privacy",
}


def default_translate(key: str, language_id: int = 0) -> str:
    """Built-in English labels, used when no translator is configured."""
    return DEFAULT_LABELS.get(key, "")


def _intro_text(service: str, language_id: int, translate: Translator) -> str:
    key = (
        "privacy.activate_intro_widget"
        if service == "soundcloud"
        else "privacy.activate_intro"
    )
    return translate(key, language_id) or ""


def _link_text(service: str, language_id: int, translate: Translator) -> str:
    if service not in POLICY_LINKS:
        return ""
    return translate(f"privacy.{service}.policy_link", language_id) or ""


def fallback_settings(
    service: str, language_id: int = 0, translate: Optional[Translator] = None
) -> PrivacySettings:
    """Settings built purely from label defaults."""
    translate = translate or default_translate
    return PrivacySettings(
        headline="",
        intro_text=_intro_text(service, language_id, translate),
        outro_text=translate("privacy.activate_outro", language_id) or "",
        policy_link=POLICY_LINKS.get(service, ""),
        link_text=_link_text(service, language_id, translate),
        button_label="",
    )


def get_settings_for_service(
    service: str,
    records: Iterable[PrivacySettingsRecord],
    language_id: int = 0,
    translate: Optional[Translator] = None,
) -> PrivacySettings:
    """Get privacy layer settings for one service.

    Args:
        service: 'youtube', 'vimeo' or 'soundcloud'
        records: Privacy settings records (all languages)
        language_id: Requested language (0 = default)
        translate: Label lookup for fallbacks

    Returns:
        PrivacySettings with empty texts filled from label defaults. For a
        translated language without its own record, only label defaults
        for that language are used (never default-language record texts).
    """
    translate = translate or default_translate
    record = pick_settings_record(list(records), language_id)

    if record is None:
        return fallback_settings(service, language_id, translate)

    if language_id > 0 and record.language_id != language_id:
        return fallback_settings(service, language_id, translate)

    fallback = fallback_settings(service, language_id, translate)
    return PrivacySettings(
        headline=record.value(service, "headline"),
        intro_text=record.value(service, "intro_text") or fallback.intro_text,
        outro_text=record.value(service, "outro_text") or fallback.outro_text,
        policy_link=record.value(service, "policy_link") or fallback.policy_link,
        link_text=record.value(service, "link_text") or fallback.link_text,
        button_label=record.value(service, "button_label"),
    )
