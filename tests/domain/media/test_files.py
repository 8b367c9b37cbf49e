"""Tests for the prefetched file lookup."""

from unittest.mock import Mock

from vidply_config.domain.media.files import PrefetchedFileLookup
from vidply_config.domain.media.models import AttachedFile, FileRole, MediaRecord


class TestPrefetchedFileLookup:
    def test_groups_by_record_and_role_in_sorting_order(self):
        lookup = PrefetchedFileLookup.from_references(
            [
                {"uid": 2, "uid_foreign": 1, "fieldname": "media_file", "sorting_foreign": 2,
                 "public_url": "/b.webm", "mime_type": "video/webm"},
                {"uid": 1, "uid_foreign": 1, "fieldname": "media_file", "sorting_foreign": 1,
                 "public_url": "/a.mp4", "mime_type": "video/mp4"},
                {"uid": 3, "uid_foreign": 1, "fieldname": "captions", "public_url": "/c.vtt",
                 "properties": {"tx_lang_code": "de"}},
                {"uid": 4, "uid_foreign": 0, "fieldname": "poster", "public_url": "/x.jpg"},
                {"uid": 5, "uid_foreign": 1, "fieldname": "unknown", "public_url": "/y"},
            ]
        )
        record = MediaRecord(uid=1, type="video")

        media = lookup.find_attached_files(record, FileRole.MEDIA_FILE)
        captions = lookup.find_attached_files(record, FileRole.CAPTIONS)

        assert [f.public_url for f in media] == ["/a.mp4", "/b.webm"]
        assert captions[0].properties == {"tx_lang_code": "de"}
        assert lookup.find_attached_files(record, FileRole.POSTER) == []

    def test_unknown_record_uses_fallback(self):
        fallback = Mock()
        fallback.find_attached_files.return_value = [AttachedFile(public_url="/late.mp4")]
        lookup = PrefetchedFileLookup({}, fallback=fallback)
        record = MediaRecord(uid=9, type="video")

        files = lookup.find_attached_files(record, FileRole.MEDIA_FILE)

        assert files[0].public_url == "/late.mp4"
        fallback.find_attached_files.assert_called_once_with(record, FileRole.MEDIA_FILE)

    def test_unknown_record_without_fallback(self):
        lookup = PrefetchedFileLookup({})
        assert lookup.find_attached_files(MediaRecord(uid=9, type="video"), FileRole.POSTER) == []
