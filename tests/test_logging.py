"""Tests for modulegen.logging."""

from __future__ import annotations

import io

from modulegen.logging import configure_logging, get_logger


def test_progress_messages_only_show_when_verbose() -> None:
    quiet = io.StringIO()
    configure_logging(stream=quiet)
    get_logger("orchestrator").debug("Generating hp / host...")
    get_logger("refs.resolver").warning("Remote ref lookup failed")

    assert quiet.getvalue() == "[modulegen] WARNING Remote ref lookup failed\n"

    loud = io.StringIO()
    configure_logging(verbose=True, stream=loud)
    get_logger("orchestrator").debug("Generating hp / host...")

    assert loud.getvalue() == "[modulegen] DEBUG Generating hp / host...\n"
    assert quiet.getvalue().count("\n") == 1


def test_configure_logging_does_not_stack_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert get_logger().name == "modulegen"
    assert get_logger("render").name == "modulegen.render"
