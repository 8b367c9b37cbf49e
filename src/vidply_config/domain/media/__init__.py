"""Media domain - records, attached files and track resolution.

This domain handles:
- Media record and attached file models
- Resolving records into normalized tracks
- Language overlay selection for related records
- URL rules and MIME inference for online media containers
"""

# Models
from .models import (
    EXTERNAL_SERVICE_TYPES,
    HLS_TYPES,
    MEDIA_TYPES,
    STREAM_URL_TYPES,
    AttachedFile,
    FileRole,
    MediaRecord,
    MediaSource,
    TextTrack,
    Track,
)

# Resolution
from .resolver import FileLookup, resolve_text_tracks, resolve_track, resolve_tracks

from .files import PrefetchedFileLookup

# Localization
from .localization import select_localized_records

# Online media
from .online import (
    container_file_name,
    detect_online_media_type,
    infer_mime_type_from_url,
    is_external_audio_url,
    is_external_video_url,
    is_hls_playlist_url,
    is_host_allowed,
    is_soundcloud_url,
    parse_allowed_domains,
)

__all__ = [
    # Models
    "EXTERNAL_SERVICE_TYPES",
    "HLS_TYPES",
    "MEDIA_TYPES",
    "STREAM_URL_TYPES",
    "AttachedFile",
    "FileRole",
    "MediaRecord",
    "MediaSource",
    "TextTrack",
    "Track",
    # Resolution
    "FileLookup",
    "PrefetchedFileLookup",
    "resolve_text_tracks",
    "resolve_track",
    "resolve_tracks",
    # Localization
    "select_localized_records",
    # Online media
    "container_file_name",
    "detect_online_media_type",
    "infer_mime_type_from_url",
    "is_external_audio_url",
    "is_external_video_url",
    "is_hls_playlist_url",
    "is_host_allowed",
    "is_soundcloud_url",
    "parse_allowed_domains",
]
