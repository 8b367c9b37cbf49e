"""
Media domain models.

Input records come from storage as frozen dataclasses. Resolved tracks are
pydantic models so they can be dumped with camelCase keys for templates
and the client-side playlist.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Declared media record types
FILE_SERVICE_TYPES = ("youtube", "vimeo")  # Online media container file
URL_TYPES = ("soundcloud", "hls", "m3u")  # Raw URL on the record
LOCAL_TYPES = ("video", "audio")  # One or more uploaded files
MEDIA_TYPES = FILE_SERVICE_TYPES + URL_TYPES + LOCAL_TYPES

EXTERNAL_SERVICE_TYPES = ("youtube", "vimeo", "soundcloud")
STREAM_URL_TYPES = EXTERNAL_SERVICE_TYPES + ("hls", "m3u")
HLS_TYPES = ("hls", "m3u", "application/x-mpegurl", "application/vnd.apple.mpegurl")

# Container extensions whose stored MIME type is a placeholder
EXTERNAL_CONTAINER_EXTENSIONS = ("externalaudio", "externalvideo")

TEXT_TRACK_KINDS = ("captions", "subtitles", "descriptions", "chapters", "metadata")
DEFAULT_SOURCE_LABEL = "Default"


class FileRole(str, Enum):
    """Field name a file is attached to on a media record."""

    MEDIA_FILE = "media_file"
    POSTER = "poster"
    CAPTIONS = "captions"
    CHAPTERS = "chapters"
    AUDIO_DESCRIPTION = "audio_description"
    SIGN_LANGUAGE = "sign_language"


@dataclass(frozen=True)
class AttachedFile:
    """A file relation as returned by the file abstraction layer.

    For caption/chapter files, ``properties`` carries ``title``,
    ``tx_lang_code`` and ``tx_track_kind``.
    """

    public_url: str
    mime_type: str = ""
    properties: Mapping[str, Any] = field(default_factory=dict)
    uid: int = 0
    extension: str = ""  # e.g. 'mp4', 'youtube', 'externalaudio'
    described_src: Optional[str] = None  # Audio-described variant of a text track


@dataclass(frozen=True)
class MediaRecord:
    """A media row attached to a content item."""

    uid: int
    type: str  # 'video' | 'audio' | 'youtube' | 'vimeo' | 'soundcloud' | 'hls' | 'm3u'
    title: str = ""
    artist: Optional[str] = None
    duration: Optional[int] = None  # in seconds
    media_url: Optional[str] = None
    enable_transcript: bool = False
    description: Optional[str] = None
    audio_description_duration: Optional[int] = None

    # Storage metadata
    language_id: int = 0
    l10n_parent: int = 0
    sorting: int = 0
    hidden: bool = False
    deleted: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "MediaRecord":
        """Build a record from a database row of the media table."""

        def optional_int(key: str) -> Optional[int]:
            value = row.get(key)
            try:
                return int(value) if value not in (None, "") else None
            except (TypeError, ValueError):
                return None

        return cls(
            uid=int(row.get("uid") or 0),
            type=str(row.get("media_type") or ""),
            title=str(row.get("title") or ""),
            artist=row.get("artist") or None,
            duration=optional_int("duration"),
            media_url=row.get("media_url") or None,
            enable_transcript=bool(row.get("enable_transcript")),
            description=row.get("description") or None,
            audio_description_duration=optional_int("audio_description_duration"),
            language_id=int(row.get("sys_language_uid") or 0),
            l10n_parent=int(row.get("l10n_parent") or 0),
            sorting=int(row.get("sorting") or 0),
            hidden=bool(row.get("hidden")),
            deleted=bool(row.get("deleted")),
        )


class CamelModel(BaseModel):
    """Immutable model dumped with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class MediaSource(CamelModel):
    """One alternate encoding of a local media item."""

    src: str
    type: str
    label: str = DEFAULT_SOURCE_LABEL


class TextTrack(CamelModel):
    src: str
    kind: str
    language_code: str
    label: str
    described_src: Optional[str] = None


class Track(CamelModel):
    """Normalized, playable unit derived from one media record."""

    title: str
    type: str  # Declared service type or resolved MIME type
    media_type: str = ""  # Declared record type (video, audio, youtube, ...)
    src: str = Field(min_length=1)
    artist: Optional[str] = None
    duration: Optional[int] = None
    sources: Optional[tuple[MediaSource, ...]] = None
    poster: Optional[str] = None
    text_tracks: tuple[TextTrack, ...] = ()
    audio_description_src: Optional[str] = None
    sign_language_src: Optional[str] = None
    enable_transcript: bool = False
    description: Optional[str] = None
    audio_description_duration: Optional[int] = None
