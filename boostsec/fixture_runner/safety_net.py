"""Routing of out-of-band errors to the step currently executing."""

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from boostsec.fixture_runner.context import ExecutionContext
from boostsec.fixture_runner.reporter import Reporter

logger = logging.getLogger(__name__)

UNATTRIBUTED_LABEL = "uncaughtException"

# Written only by the step runner, read only by SafetyNet. Steps never run
# concurrently, so there is at most one writer at a time.
_active_context: ExecutionContext | None = None


def activate(context: ExecutionContext | None) -> None:
    """Publish the context of the step about to start."""
    global _active_context
    _active_context = context


class SafetyNet:
    """Catches errors raised outside any awaited step.

    Errors from callbacks scheduled on the event loop fail the active
    context. With no active context they are reported as unattributed
    failures and counted.
    """

    def __init__(self, reporter: Reporter) -> None:
        """Initialize with the reporter receiving unattributed errors."""
        self.reporter = reporter
        self.unattributed_failures = 0

    def handle_error(self, error: BaseException) -> None:
        """Route error to the active context or report it."""
        context = _active_context
        if context is not None and not context.disposed:
            logger.info(f"Routing uncaught error to the active step: {error!r}")
            context.fail(error)
            return

        logger.error(f"Uncaught error with no active step: {error!r}")
        self.unattributed_failures += 1
        self.reporter.on_step_outcome(UNATTRIBUTED_LABEL, error)

    def _handle_loop_exception(
        self, loop: asyncio.AbstractEventLoop, event: dict[str, Any]
    ) -> None:
        error = event.get("exception")
        if error is None:
            loop.default_exception_handler(event)
            return
        self.handle_error(error)

    @contextmanager
    def installed(self, loop: asyncio.AbstractEventLoop) -> Iterator["SafetyNet"]:
        """Install as the loop's exception handler for the duration."""
        previous = loop.get_exception_handler()
        loop.set_exception_handler(self._handle_loop_exception)
        try:
            yield self
        finally:
            loop.set_exception_handler(previous)
            activate(None)
