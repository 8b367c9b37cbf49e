"""Tests for loguru setup."""

import pytest
from loguru import logger

from vidply_config.core.config import LoggingConfig
from vidply_config.core.output import setup_from_config, setup_loguru


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()


def test_setup_loguru_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "vidply.log"

    setup_loguru(log_file, level="DEBUG")
    logger.debug("resolver ready")

    content = log_file.read_text()
    assert "Loguru initialized" in content
    assert "resolver ready" in content


def test_level_filters_messages(tmp_path):
    log_file = tmp_path / "vidply.log"

    setup_loguru(log_file, level="WARNING")
    logger.info("hidden message")
    logger.warning("visible message")

    content = log_file.read_text()
    assert "hidden message" not in content
    assert "visible message" in content


def test_setup_from_config(tmp_path):
    log_file = tmp_path / "configured.log"

    setup_from_config(LoggingConfig(level="INFO", log_file=str(log_file)))
    logger.info("configured")

    assert "configured" in log_file.read_text()
