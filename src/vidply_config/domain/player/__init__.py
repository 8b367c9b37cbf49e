"""Player domain - option decoding and configuration building.

This domain handles:
- Decoding the stored option mask into named flags
- Single-item vs playlist classification
- Asset loading flags (privacy layer, native engine, playlist, HLS)
"""

from .models import (
    AccessibilityTrack,
    AudioDescriptionTrack,
    Dimensions,
    MediaFile,
    PlayerConfiguration,
    PlayerOptions,
    PlaylistData,
    PlaylistOptions,
)
from .options import OPTION_BITS, decode_option_mask, decode_options
from .builder import (
    build,
    external_service_types,
    make_unique_id,
    needs_hls,
    split_text_tracks,
)

__all__ = [
    # Models
    "AccessibilityTrack",
    "AudioDescriptionTrack",
    "Dimensions",
    "MediaFile",
    "PlayerConfiguration",
    "PlayerOptions",
    "PlaylistData",
    "PlaylistOptions",
    # Options
    "OPTION_BITS",
    "decode_option_mask",
    "decode_options",
    # Builder
    "build",
    "external_service_types",
    "make_unique_id",
    "needs_hls",
    "split_text_tracks",
]
