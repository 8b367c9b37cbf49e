"""
Prefetched file relations.

Hosts that can load all file references for a batch of media records in
one query wrap them in a PrefetchedFileLookup instead of querying once per
record and role.
"""

from collections import defaultdict
from typing import Any, Iterable, Mapping, Optional, Sequence

from loguru import logger

from .models import AttachedFile, FileRole, MediaRecord


class PrefetchedFileLookup:
    """FileLookup over file references loaded up front.

    Falls back to ``fallback`` (another FileLookup) for records that were
    not part of the prefetch.
    """

    def __init__(
        self,
        files_by_record: Mapping[int, Mapping[str, Sequence[AttachedFile]]],
        fallback: Optional[Any] = None,
    ):
        self._files = {
            uid: {role: list(files) for role, files in roles.items()}
            for uid, roles in files_by_record.items()
        }
        self._fallback = fallback

    def find_attached_files(
        self, record: MediaRecord, role: FileRole
    ) -> Sequence[AttachedFile]:
        if record.uid in self._files:
            return list(self._files[record.uid].get(role.value, []))
        if self._fallback is not None:
            return self._fallback.find_attached_files(record, role)
        return []

    @classmethod
    def from_references(
        cls, references: Iterable[Mapping[str, Any]], fallback: Optional[Any] = None
    ) -> "PrefetchedFileLookup":
        """Group file reference rows by record and role.

        Each row needs ``uid_foreign`` (media record uid), ``fieldname``
        (role) and ``public_url``; ``sorting_foreign`` orders files within a
        role. Rows with an unknown role or missing ids are skipped.
        """
        known_roles = {role.value for role in FileRole}
        grouped: dict[int, dict[str, list[tuple[int, AttachedFile]]]] = defaultdict(
            lambda: defaultdict(list)
        )

        for row in references:
            uid_foreign = int(row.get("uid_foreign") or 0)
            fieldname = str(row.get("fieldname") or "")
            if uid_foreign <= 0 or fieldname not in known_roles:
                logger.debug(f"Skipping file reference {row.get('uid')}: incomplete row")
                continue

            attached = AttachedFile(
                public_url=str(row.get("public_url") or ""),
                mime_type=str(row.get("mime_type") or ""),
                properties=dict(row.get("properties") or {}),
                uid=int(row.get("uid") or 0),
                extension=str(row.get("extension") or ""),
                described_src=row.get("described_src") or None,
            )
            grouped[uid_foreign][fieldname].append(
                (int(row.get("sorting_foreign") or 0), attached)
            )

        files_by_record = {
            uid: {
                role: [f for _, f in sorted(entries, key=lambda entry: entry[0])]
                for role, entries in roles.items()
            }
            for uid, roles in grouped.items()
        }
        return cls(files_by_record, fallback=fallback)
