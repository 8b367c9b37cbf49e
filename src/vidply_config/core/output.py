"""
Logging setup using Loguru.

Library modules only emit through ``loguru.logger``; sinks are configured
once by the host application via setup_loguru().
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def get_log_file_path() -> Path:
    """Get the default path to the log file."""
    return get_data_dir() / "vidply-config.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = False,
) -> None:
    """
    Configure loguru with a rotating file sink and optional stderr output.

    Args:
        log_file: Path to log file (default: get_log_file_path())
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Also log to stderr
    """
    log_file = log_file or get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format=LOG_FORMAT,
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def setup_from_config(logging_config: LoggingConfig) -> None:
    """Configure logging from the [logging] config section."""
    log_file = Path(logging_config.log_file) if logging_config.log_file else None
    setup_loguru(
        log_file=log_file,
        level=logging_config.level,
        console_output=logging_config.console_output,
    )
