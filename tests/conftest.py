"""Shared fixtures for vidply-config tests."""

from typing import Optional

import pytest

from vidply_config.domain.media.models import AttachedFile, FileRole, MediaRecord


class FakeFileLookup:
    """In-memory file lookup keyed by (record uid, role).

    Roles listed in ``failing`` raise, to exercise lookup failure isolation.
    """

    def __init__(self, files: Optional[dict] = None, failing: tuple = ()):
        self.files = files or {}
        self.failing = failing
        self.calls: list[tuple[int, FileRole]] = []

    def add(self, uid: int, role: FileRole, *files: AttachedFile) -> "FakeFileLookup":
        self.files.setdefault((uid, role), []).extend(files)
        return self

    def find_attached_files(self, record: MediaRecord, role: FileRole):
        self.calls.append((record.uid, role))
        if (record.uid, role) in self.failing:
            raise RuntimeError(f"storage offline for {record.uid}/{role.value}")
        return list(self.files.get((record.uid, role), []))


@pytest.fixture
def file_lookup() -> FakeFileLookup:
    return FakeFileLookup()


@pytest.fixture
def lookup_factory():
    """Build a FakeFileLookup with custom failing roles."""
    return FakeFileLookup


@pytest.fixture
def mp4_file() -> AttachedFile:
    return AttachedFile(
        public_url="/fileadmin/video/intro.mp4", mime_type="video/mp4", uid=11, extension="mp4"
    )


@pytest.fixture
def webm_file() -> AttachedFile:
    return AttachedFile(
        public_url="/fileadmin/video/intro.webm", mime_type="video/webm", uid=12, extension="webm"
    )
