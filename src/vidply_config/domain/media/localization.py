"""
Language overlay selection for media records related to a content item.
"""

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from .models import MediaRecord


def _visible(rows: Iterable[MediaRecord]) -> list[MediaRecord]:
    return [row for row in rows if row.uid > 0 and not row.hidden and not row.deleted]


def select_localized_records(
    relations: Sequence[tuple[int, int]],
    rows: Iterable[MediaRecord],
    language_id: int = 0,
) -> list[MediaRecord]:
    """Pick the record to render for each relation, in relation order.

    For a translated page (language_id > 0) the referenced record is used if
    it is already in that language, otherwise its translation, otherwise the
    default-language record. For the default language a translated reference
    falls back to its default-language parent.

    Args:
        relations: (media_uid, sorting) pairs, already ordered by sorting
        rows: Candidate records (referenced, default-language and translated)
        language_id: Requested language (0 = default)

    Returns:
        Selected records with the relation's sorting applied. Relations that
        point at missing, hidden or deleted records are skipped.
    """
    visible = _visible(rows)
    by_uid = {row.uid: row for row in visible}
    defaults_by_uid = {row.uid: row for row in visible if row.language_id == 0}
    translated_by_parent: dict[int, MediaRecord] = {}
    if language_id > 0:
        for row in visible:
            if row.language_id == language_id and row.l10n_parent > 0:
                translated_by_parent.setdefault(row.l10n_parent, row)

    selected_records = []
    for media_uid, sorting in relations:
        referenced = by_uid.get(media_uid)
        if referenced is None:
            continue

        default_uid = media_uid if referenced.language_id == 0 else referenced.l10n_parent

        selected: Optional[MediaRecord] = None
        if language_id > 0:
            if referenced.language_id == language_id:
                selected = referenced
            elif default_uid in translated_by_parent:
                selected = translated_by_parent[default_uid]
            else:
                selected = defaults_by_uid.get(default_uid)
        elif referenced.language_id == 0:
            selected = referenced
        else:
            selected = defaults_by_uid.get(default_uid)

        if selected is not None:
            selected_records.append(replace(selected, sorting=sorting))

    return selected_records
