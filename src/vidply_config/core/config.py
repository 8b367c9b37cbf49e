"""
Configuration management for vidply-config
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger


@dataclass
class PlayerDefaults:
    """Fallback values used when a content item leaves a setting unset."""

    default_width: int = 800
    default_height: int = 450
    default_volume: float = 0.8
    default_playback_speed: float = 1.0

    def validate(self) -> None:
        """Validate player default values.

        Raises:
            ValueError: If a default is outside the range the player accepts
        """
        if self.default_width <= 0 or self.default_height <= 0:
            raise ValueError(
                f"Invalid dimensions: {self.default_width}x{self.default_height}. "
                "Width and height must be positive."
            )
        if not 0.0 <= self.default_volume <= 1.0:
            raise ValueError(
                f"Invalid default volume: {self.default_volume}. "
                "Volume must be between 0.0 and 1.0."
            )
        if not 0.25 <= self.default_playback_speed <= 2.0:
            raise ValueError(
                f"Invalid default playback speed: {self.default_playback_speed}. "
                "Speed must be between 0.25 and 2.0."
            )


@dataclass
class OnlineMediaConfig:
    """Host allow-lists for URL based media containers."""

    allowed_video_domains: str = ""  # Comma or newline separated
    allowed_audio_domains: str = ""


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # default: ~/.local/share/vidply-config/vidply-config.log
    console_output: bool = False


@dataclass
class Config:
    """Main configuration object."""

    player: PlayerDefaults = field(default_factory=PlayerDefaults)
    online_media: OnlineMediaConfig = field(default_factory=OnlineMediaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "vidply-config"
    return Path.home() / ".config" / "vidply-config"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "vidply-config"
    return Path.home() / ".local" / "share" / "vidply-config"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            return config_path if config_path.exists() else None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/vidply-config (or ~/.config/vidply-config)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def parse_config(toml_data: dict) -> Config:
    """Build a Config from already-parsed TOML data.

    Unknown keys are ignored. Sections that fail validation fall back to
    their defaults.
    """
    config = Config()

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerDefaults(
            default_width=int(
                player_data.get("default_width", config.player.default_width)
            ),
            default_height=int(
                player_data.get("default_height", config.player.default_height)
            ),
            default_volume=float(
                player_data.get("default_volume", config.player.default_volume)
            ),
            default_playback_speed=float(
                player_data.get(
                    "default_playback_speed", config.player.default_playback_speed
                )
            ),
        )
        try:
            config.player.validate()
        except ValueError as e:
            logger.warning(f"Invalid player configuration: {e}")
            logger.warning("Using default player configuration.")
            config.player = PlayerDefaults()

    if "online_media" in toml_data:
        online_data = toml_data["online_media"]
        config.online_media = OnlineMediaConfig(
            allowed_video_domains=online_data.get(
                "allowed_video_domains", config.online_media.allowed_video_domains
            ),
            allowed_audio_domains=online_data.get(
                "allowed_audio_domains", config.online_media.allowed_audio_domains
            ),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return config


def _apply_env_overrides(config: Config) -> Config:
    video_domains = os.environ.get("VIDPLY_ALLOWED_VIDEO_DOMAINS")
    audio_domains = os.environ.get("VIDPLY_ALLOWED_AUDIO_DOMAINS")

    if video_domains:
        config.online_media.allowed_video_domains = video_domains
    if audio_domains:
        config.online_media.allowed_audio_domains = audio_domains
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - VIDPLY_ALLOWED_VIDEO_DOMAINS
    - VIDPLY_ALLOWED_AUDIO_DOMAINS

    Args:
        config_path: Explicit config file. Defaults to get_config_path().
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        config = parse_config(toml_data)
    except (tomllib.TOMLDecodeError, OSError, TypeError, ValueError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        config = Config()

    return _apply_env_overrides(config)
