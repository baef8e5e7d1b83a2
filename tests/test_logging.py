"""Tests for the package logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from wavegen.logging import configure_logging, get_logger


def test_get_logger_nests_under_package() -> None:
    assert get_logger("parser").name == "wavegen.parser"
    assert get_logger().name == "wavegen"


def test_configure_logging_defaults_to_info() -> None:
    logger = configure_logging()
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_verbose_enables_debug() -> None:
    logger = configure_logging(verbose=True)
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_repeated_configuration_replaces_handlers(tmp_path: Path) -> None:
    configure_logging()
    logger = configure_logging(log_file=tmp_path / "wavegen.log")

    assert len(logger.handlers) == 2
    # console stays at INFO while the file records debug detail
    assert logger.handlers[0].level == logging.INFO
    assert logger.level == logging.DEBUG

    get_logger("orchestrator").debug("written to the log file")
    for handler in logger.handlers:
        handler.flush()
    assert "written to the log file" in (tmp_path / "wavegen.log").read_text(encoding="utf-8")
