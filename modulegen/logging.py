"""Logging setup for modulegen runs.

Progress messages are emitted at DEBUG and only show up with ``--verbose``;
degraded ref lookups and name collisions are WARNINGs and always show.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOGGER_NAME = "modulegen"
_FORMAT = "[modulegen] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the modulegen hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Send modulegen records to stderr, at DEBUG when ``verbose`` is set."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
