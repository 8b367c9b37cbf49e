"""
Track resolution for media records.

Turns one media record plus its attached file relations into a normalized
Track. Records whose required source is missing are dropped (None), so an
author can leave a row half-finished without breaking the player.
"""

from typing import Iterable, Optional, Protocol, Sequence

from loguru import logger

from .models import (
    DEFAULT_SOURCE_LABEL,
    EXTERNAL_CONTAINER_EXTENSIONS,
    FILE_SERVICE_TYPES,
    LOCAL_TYPES,
    URL_TYPES,
    AttachedFile,
    FileRole,
    MediaRecord,
    MediaSource,
    TextTrack,
    Track,
)
from .online import infer_mime_type_from_url

DEFAULT_TEXT_TRACK_LANGUAGE = "en"
DEFAULT_TITLE = "Untitled"


class FileLookup(Protocol):
    """File abstraction layer used to find a record's attached files."""

    def find_attached_files(
        self, record: MediaRecord, role: FileRole
    ) -> Sequence[AttachedFile]:
        """Return the files attached to ``record`` under ``role``, in sort order."""
        ...


def find_files(
    file_lookup: FileLookup, record: MediaRecord, role: FileRole
) -> list[AttachedFile]:
    """Look up attached files, treating a failing lookup as "no files".

    A failure only affects this record and role; sibling records and other
    roles on the same record still resolve.
    """
    try:
        return list(file_lookup.find_attached_files(record, role) or [])
    except Exception:
        logger.exception(
            f"File lookup failed for media record {record.uid} ({role.value})"
        )
        return []


def _first_url(files: Sequence[AttachedFile]) -> Optional[str]:
    if files and files[0].public_url:
        return files[0].public_url
    return None


def _file_mime_type(file: AttachedFile, mime_cache: dict[str, str]) -> str:
    """MIME type of a media file, inferring it for external containers.

    External audio/video containers are stored as text/plain, but the
    <source type> must match the remote media.
    """
    if file.extension not in EXTERNAL_CONTAINER_EXTENSIONS:
        return file.mime_type

    cache_key = f"{file.public_url}|{file.mime_type}"
    if cache_key not in mime_cache:
        mime_cache[cache_key] = infer_mime_type_from_url(
            file.public_url, file.mime_type
        )
    return mime_cache[cache_key]


def _resolve_local_sources(
    files: Sequence[AttachedFile], mime_cache: dict[str, str]
) -> Optional[dict]:
    """Primary src/type plus alternate sources for video/audio records."""
    playable = [f for f in files if f.public_url and f.public_url.strip()]
    if not playable:
        return None

    if len(playable) == 1:
        return {
            "src": playable[0].public_url,
            "type": _file_mime_type(playable[0], mime_cache),
        }

    sources = tuple(
        MediaSource(
            src=f.public_url,
            type=_file_mime_type(f, mime_cache),
            label=DEFAULT_SOURCE_LABEL,
        )
        for f in playable
    )
    # First file stays the primary src for single-source consumers
    return {"src": sources[0].src, "type": sources[0].type, "sources": sources}


def _resolve_primary_source(
    record: MediaRecord, file_lookup: FileLookup, mime_cache: dict[str, str]
) -> Optional[dict]:
    media_type = record.type

    if media_type in FILE_SERVICE_TYPES:
        src = _first_url(find_files(file_lookup, record, FileRole.MEDIA_FILE))
        if not src:
            return None
        return {"src": src, "type": media_type}

    if media_type in URL_TYPES:
        if not record.media_url or not record.media_url.strip():
            return None
        return {"src": record.media_url, "type": media_type}

    if media_type in LOCAL_TYPES:
        files = find_files(file_lookup, record, FileRole.MEDIA_FILE)
        return _resolve_local_sources(files, mime_cache)

    return None


def _text_track(file: AttachedFile, default_kind: str, force_kind: bool) -> TextTrack:
    properties = file.properties or {}
    kind = default_kind if force_kind else (properties.get("tx_track_kind") or default_kind)
    if kind == "descriptions":
        default_label = "Descriptions"
    elif kind == "chapters":
        default_label = "Chapters"
    else:
        default_label = "Captions"

    return TextTrack(
        src=file.public_url,
        kind=kind,
        language_code=properties.get("tx_lang_code") or DEFAULT_TEXT_TRACK_LANGUAGE,
        label=properties.get("title") or default_label,
        described_src=file.described_src or None,
    )


def resolve_text_tracks(
    record: MediaRecord, file_lookup: FileLookup
) -> tuple[TextTrack, ...]:
    """Caption-role tracks first, then chapter-role tracks."""
    text_tracks = [
        _text_track(f, "captions", force_kind=False)
        for f in find_files(file_lookup, record, FileRole.CAPTIONS)
        if f.public_url
    ]
    text_tracks.extend(
        _text_track(f, "chapters", force_kind=True)
        for f in find_files(file_lookup, record, FileRole.CHAPTERS)
        if f.public_url
    )
    return tuple(text_tracks)


def resolve_track(
    record: MediaRecord,
    file_lookup: FileLookup,
    mime_cache: Optional[dict[str, str]] = None,
) -> Optional[Track]:
    """Resolve one media record into a Track.

    Args:
        record: Media record to resolve
        file_lookup: File abstraction layer
        mime_cache: Per-request cache for inferred MIME types

    Returns:
        Track, or None if the record's type is unknown or its required
        file/URL is missing
    """
    if mime_cache is None:
        mime_cache = {}

    primary = _resolve_primary_source(record, file_lookup, mime_cache)
    if primary is None:
        logger.debug(
            f"Skipping media record {record.uid}: no playable source for type '{record.type}'"
        )
        return None

    # Optional attachments - absence just leaves the field unset
    poster = _first_url(find_files(file_lookup, record, FileRole.POSTER))
    audio_description_src = _first_url(
        find_files(file_lookup, record, FileRole.AUDIO_DESCRIPTION)
    )
    sign_language_src = _first_url(
        find_files(file_lookup, record, FileRole.SIGN_LANGUAGE)
    )

    return Track(
        title=record.title or DEFAULT_TITLE,
        artist=record.artist or None,
        duration=record.duration if record.duration and record.duration > 0 else None,
        poster=poster,
        text_tracks=resolve_text_tracks(record, file_lookup),
        audio_description_src=audio_description_src,
        sign_language_src=sign_language_src,
        enable_transcript=bool(record.enable_transcript),
        description=record.description or None,
        audio_description_duration=record.audio_description_duration or None,
        media_type=record.type,
        **primary,
    )


def resolve_tracks(
    records: Iterable[MediaRecord], file_lookup: FileLookup
) -> list[Track]:
    """Resolve records in order, dropping those without a playable source."""
    mime_cache: dict[str, str] = {}
    tracks = []
    for record in records:
        track = resolve_track(record, file_lookup, mime_cache)
        if track is not None:
            tracks.append(track)
    return tracks
