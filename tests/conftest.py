from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder(tmp_path: Path) -> SourceBuilder:
    """Provide a reusable VHDL source folder rooted at the pytest tmp_path."""
    return SourceBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _restore_wavegen_logger() -> Iterator[None]:
    """Undo handler changes made by CLI runs so caplog keeps working."""
    yield
    logger = logging.getLogger("wavegen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
