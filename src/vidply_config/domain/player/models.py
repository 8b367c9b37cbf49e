"""
Player configuration models.

Everything here is immutable; the builder derives new values with
model_copy() instead of mutating.
"""

from types import MappingProxyType
from typing import Literal, Mapping, Optional

from pydantic import Field, field_serializer, field_validator

from ..media.models import CamelModel, MediaSource, TextTrack, Track
from ..privacy.models import PrivacySettings

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 450
DEFAULT_VOLUME = 0.8
DEFAULT_PLAYBACK_SPEED = 1.0
SIGN_LANGUAGE_POSITION = "bottom-right"


class Dimensions(CamelModel):
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


class PlayerOptions(CamelModel):
    """Player flags and settings, decoded once from the stored option mask."""

    autoplay: bool = False
    loop: bool = False
    muted: bool = False
    controls: bool = False
    captions_default: bool = False
    transcript: bool = False
    keyboard: bool = False
    responsive: bool = False
    auto_advance: bool = False

    volume: float = DEFAULT_VOLUME  # 0.0 - 1.0
    playback_speed: float = DEFAULT_PLAYBACK_SPEED  # 0.25 - 2.0
    language: str = ""  # empty = auto-detect
    default_transcript_language: str = ""

    # Filled in by the builder for single items
    poster: Optional[str] = None
    audio_description_src: Optional[str] = None
    audio_description_button: bool = False
    sign_language_src: Optional[str] = None
    sign_language_button: bool = False
    sign_language_position: Optional[str] = None


class MediaFile(CamelModel):
    """Single local source for the native media element."""

    public_url: str
    mime_type: str
    label: str = "Default"


class AccessibilityTrack(CamelModel):
    """Sign language video (or base for other accessibility media)."""

    src: str
    lang: str = ""
    label: str


class AudioDescriptionTrack(AccessibilityTrack):
    mime_type: str = ""


class PlaylistOptions(CamelModel):
    autoplay: bool = False
    auto_advance: bool = False
    loop: bool = False
    show_panel: bool = True
    is_mixed_playlist: bool = False
    has_external_media: bool = False
    external_service_types: tuple[str, ...] = ()


class PlaylistData(CamelModel):
    tracks: tuple[Track, ...]
    options: PlaylistOptions


class PlayerConfiguration(CamelModel):
    """Everything template rendering needs for one player instance."""

    unique_id: str
    is_empty: bool
    media_type: Literal["video", "audio"] = "video"
    service_type: Optional[Literal["youtube", "vimeo", "soundcloud"]] = None

    # Asset loading flags
    needs_privacy_layer: bool = False
    needs_vid_play_engine: bool = True
    needs_playlist_module: bool = True
    needs_hls_module: bool = False

    dimensions: Dimensions = Dimensions()
    options: PlayerOptions = PlayerOptions()
    language_selection: str = ""

    # Single item
    video_url: Optional[str] = None
    media_files: tuple[MediaFile, ...] = ()
    sources: Optional[tuple[MediaSource, ...]] = None
    poster: Optional[str] = None
    captions: tuple[TextTrack, ...] = ()
    chapters: tuple[TextTrack, ...] = ()
    audio_description_tracks: tuple[AudioDescriptionTrack, ...] = ()
    sign_language_tracks: tuple[AccessibilityTrack, ...] = ()

    # Playlist (two or more tracks)
    playlist_data: Optional[PlaylistData] = None

    tracks: tuple[Track, ...] = ()
    has_external_media: bool = False
    external_service_types: tuple[str, ...] = ()
    is_mixed_playlist: bool = False
    privacy_settings: Mapping[str, PrivacySettings] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("privacy_settings")
    @classmethod
    def _freeze_privacy_settings(
        cls, value: Mapping[str, PrivacySettings]
    ) -> Mapping[str, PrivacySettings]:
        return MappingProxyType(dict(value))

    @field_serializer("privacy_settings")
    def _dump_privacy_settings(
        self, value: Mapping[str, PrivacySettings], info
    ) -> dict:
        return {
            service: settings.model_dump(mode=info.mode, by_alias=bool(info.by_alias))
            for service, settings in value.items()
        }

    @property
    def is_playlist(self) -> bool:
        return self.playlist_data is not None

    def to_template_data(self) -> dict:
        """Dump with camelCase keys for template rendering."""
        return self.model_dump(by_alias=True, mode="json")
