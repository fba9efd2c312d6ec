from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture
def tree_builder(tmp_path: Path) -> TreeBuilder:
    """Provide a combined host/shim/platform tree rooted at the pytest tmp_path."""
    return TreeBuilder(tmp_path, "hp")


@pytest.fixture(autouse=True)
def _reset_modulegen_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so later tests do not write to stale streams."""
    yield
    logger = logging.getLogger("modulegen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
