"""
URL rules for online media containers.

Covers MIME inference for external audio/video container files and the
acceptance checks applied before a URL is registered as a SoundCloud, HLS
or external audio/video container.
"""

import re
from pathlib import PurePosixPath
from typing import Optional, Sequence
from urllib.parse import urlsplit

from vidply_config.core.config import OnlineMediaConfig

MIME_TYPES_BY_EXTENSION = {
    # audio
    "mp3": "audio/mpeg",
    "ogg": "audio/ogg",
    "oga": "audio/ogg",
    "wav": "audio/wav",
    "m4a": "audio/mp4",
    "aac": "audio/aac",
    "flac": "audio/flac",
    # video
    "mp4": "video/mp4",
    "m4v": "video/x-m4v",
    "webm": "video/webm",
    "ogv": "video/ogg",
}

EXTERNAL_AUDIO_EXTENSIONS = ("mp3", "wav", "m4a", "aac", "flac", "oga")
EXTERNAL_VIDEO_EXTENSIONS = ("mp4", "m4v", "webm", "ogv")
HLS_EXTENSIONS = ("m3u8",)

FALLBACK_MIME_TYPE = "application/octet-stream"


def url_path_extension(url: str) -> str:
    """Lower-cased file extension of the URL path, without the dot."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return ""
    return PurePosixPath(path).suffix.lstrip(".").lower()


def infer_mime_type_from_url(url: str, fallback: str = "") -> str:
    """Guess a media MIME type from the URL path extension.

    Args:
        url: Public media URL
        fallback: Returned when the extension is unknown

    Returns:
        MIME type, the fallback, or application/octet-stream
    """
    mime_type = MIME_TYPES_BY_EXTENSION.get(url_path_extension(url))
    if mime_type:
        return mime_type
    return fallback or FALLBACK_MIME_TYPE


def parse_allowed_domains(raw: str) -> list[str]:
    """Split a comma/newline separated domain list."""
    items = re.split(r"[,\r\n]+", raw or "")
    return [item.strip() for item in items if item.strip()]


def is_host_allowed(scheme: str, host: str, patterns: Sequence[str]) -> bool:
    """Check a host against allow-list patterns.

    Patterns may be a bare host (``cdn.example.com``), carry a scheme
    (``https://cdn.example.com``) or use a leading wildcard
    (``*.example.com``, which also matches ``example.com``). An empty
    allow-list allows nothing.
    """
    scheme = scheme.lower()
    host = host.lower()

    for pattern in patterns:
        pattern = pattern.strip()
        if not pattern:
            continue

        pattern_scheme: Optional[str] = None
        pattern_host = pattern
        if "://" in pattern:
            # urlsplit mangles wildcard hosts, split by hand
            pattern_scheme, pattern_host = pattern.split("://", 1)
            pattern_scheme = pattern_scheme.strip().lower()
            pattern_host = pattern_host.strip().split("/", 1)[0]
        pattern_host = pattern_host.lower()

        if pattern_scheme and pattern_scheme != scheme:
            continue

        if pattern_host == host:
            return True

        if pattern_host.startswith("*."):
            base = pattern_host[2:]
            if base and (host == base or host.endswith("." + base)):
                return True

    return False


def _split_http_url(url: str) -> Optional[tuple[str, str, str]]:
    """Return (scheme, host, path) for an absolute http(s) URL."""
    url = (url or "").strip()
    if not url:
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if scheme not in ("http", "https") or not host:
        return None
    return scheme, host, parts.path


def is_soundcloud_url(url: str) -> bool:
    """SoundCloud track/set URL, including on.soundcloud.com short links."""
    parts = _split_http_url(url)
    if parts is None:
        return False
    _, host, _ = parts
    return host == "soundcloud.com" or host.endswith(".soundcloud.com")


def _has_allowed_extension(
    url: str, extensions: Sequence[str], allowed_domains: Sequence[str]
) -> bool:
    parts = _split_http_url(url)
    if parts is None:
        return False
    scheme, host, path = parts
    if PurePosixPath(path).suffix.lstrip(".").lower() not in extensions:
        return False
    return is_host_allowed(scheme, host, allowed_domains)


def is_hls_playlist_url(url: str, allowed_domains: Sequence[str]) -> bool:
    """An .m3u8 playlist on an allowed video host."""
    return _has_allowed_extension(url, HLS_EXTENSIONS, allowed_domains)


def is_external_audio_url(url: str, allowed_domains: Sequence[str]) -> bool:
    return _has_allowed_extension(url, EXTERNAL_AUDIO_EXTENSIONS, allowed_domains)


def is_external_video_url(url: str, allowed_domains: Sequence[str]) -> bool:
    return _has_allowed_extension(url, EXTERNAL_VIDEO_EXTENSIONS, allowed_domains)


def container_file_name(base_name: str, extension: str, default: str = "media") -> str:
    """Build the storage file name for an online media container.

    Example:
        >>> container_file_name("My Stream.m3u8", "hls")
        'My_Stream.hls'
    """
    base_name = re.sub(r"[^a-zA-Z0-9._-]+", "_", (base_name or "").strip())
    stem = PurePosixPath(base_name).stem if base_name else ""
    if not stem.strip("._-"):
        stem = default
    return f"{stem}.{extension}"


def detect_online_media_type(url: str, online_media: OnlineMediaConfig) -> Optional[str]:
    """Pick the container type a pasted URL would be registered as.

    Args:
        url: URL entered by an editor
        online_media: Configured host allow-lists

    Returns:
        "soundcloud", "hls", "externalaudio", "externalvideo", or None when
        no container accepts the URL
    """
    video_domains = parse_allowed_domains(online_media.allowed_video_domains)
    audio_domains = parse_allowed_domains(online_media.allowed_audio_domains)

    if is_soundcloud_url(url):
        return "soundcloud"
    if is_hls_playlist_url(url, video_domains):
        return "hls"
    if is_external_audio_url(url, audio_domains):
        return "externalaudio"
    if is_external_video_url(url, video_domains):
        return "externalvideo"
    return None
