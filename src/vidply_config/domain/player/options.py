"""
Decoding of the stored player option mask.

The content item stores its checkboxes as a single integer. It is decoded
here into named booleans and never passed further as a raw integer.
"""

import math
from typing import Any, Optional

from loguru import logger

from vidply_config.core.config import PlayerDefaults
from .models import PlayerOptions

# Bit position -> option name
OPTION_BITS = (
    "autoplay",
    "loop",
    "muted",
    "controls",
    "captions_default",
    "transcript",
    "keyboard",
    "responsive",
    "auto_advance",
)
OPTION_MASK = (1 << len(OPTION_BITS)) - 1

VOLUME_RANGE = (0.0, 1.0)
PLAYBACK_SPEED_RANGE = (0.25, 2.0)


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_clamped_float(value: Any, default: float, bounds: tuple[float, float]) -> float:
    """Coerce to float within bounds; missing or unparsable values use default."""
    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric player setting {value!r}")
        return default
    if math.isnan(number):
        return default
    low, high = bounds
    return min(max(number, low), high)


def decode_option_mask(mask: Any) -> dict[str, bool]:
    """Map each option bit to a named boolean.

    Bits above the known options are ignored; negative or non-numeric
    masks decode as all-off.

    Example:
        >>> decode_option_mask(328)["keyboard"]
        True
    """
    value = _to_int(mask)
    if value < 0:
        logger.debug(f"Negative option mask {value}, treating as 0")
        value = 0
    value &= OPTION_MASK
    return {name: bool(value & (1 << bit)) for bit, name in enumerate(OPTION_BITS)}


def decode_options(
    mask: Any,
    volume: Any = None,
    playback_speed: Any = None,
    language: Optional[str] = None,
    defaults: Optional[PlayerDefaults] = None,
) -> PlayerOptions:
    """Build PlayerOptions from the raw stored settings.

    Args:
        mask: Option bitmask (bit0 autoplay ... bit8 autoAdvance)
        volume: 0.0-1.0, clamped
        playback_speed: 0.25-2.0, clamped
        language: Player language code, empty for auto-detect
        defaults: Configured fallbacks for volume and speed

    Returns:
        Decoded PlayerOptions
    """
    defaults = defaults or PlayerDefaults()
    language = (language or "").strip()

    return PlayerOptions(
        **decode_option_mask(mask),
        volume=_to_clamped_float(volume, defaults.default_volume, VOLUME_RANGE),
        playback_speed=_to_clamped_float(
            playback_speed, defaults.default_playback_speed, PLAYBACK_SPEED_RANGE
        ),
        language=language,
        default_transcript_language=language,
    )
