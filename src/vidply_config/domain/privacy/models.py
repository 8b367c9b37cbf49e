"""
Privacy layer domain models.
"""

from dataclasses import dataclass
from typing import Optional

from ..media.models import CamelModel


class PrivacySettings(CamelModel):
    """Texts shown on the consent layer before a third-party embed loads."""

    headline: str = ""
    intro_text: str = ""
    outro_text: str = ""
    policy_link: str = ""
    link_text: str = ""
    button_label: str = ""


@dataclass(frozen=True)
class PrivacySettingsRecord:
    """A row of the site-wide privacy settings table.

    Per-service columns are stored flat, e.g. ``youtube_headline``.
    """

    values: dict
    language_id: int = 0
    hidden: bool = False
    deleted: bool = False

    def value(self, service: str, key: str) -> str:
        return str(self.values.get(f"{service}_{key}") or "")

    @classmethod
    def from_row(cls, row: dict) -> "PrivacySettingsRecord":
        return cls(
            values=dict(row),
            language_id=int(row.get("sys_language_uid") or 0),
            hidden=bool(row.get("hidden")),
            deleted=bool(row.get("deleted")),
        )


def pick_settings_record(
    records: list[PrivacySettingsRecord], language_id: int = 0
) -> Optional[PrivacySettingsRecord]:
    """Translated record for language_id if any, else the default one."""
    visible = [r for r in records if not r.hidden and not r.deleted]
    if language_id > 0:
        for record in visible:
            if record.language_id == language_id:
                return record
    for record in visible:
        if record.language_id == 0:
            return record
    return None
