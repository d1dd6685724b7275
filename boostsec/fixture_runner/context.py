"""Single-use completion token handed to every lifecycle hook."""

import asyncio
import enum
import inspect
import logging
from collections.abc import Callable
from typing import Any

from boostsec.fixture_runner.errors import StepTimeoutError
from boostsec.fixture_runner.models.config import DEFAULT_TIMEOUT_MS

logger = logging.getLogger(__name__)


class ContextState(enum.Enum):
    """Lifecycle of an execution context."""

    CREATED = "created"
    ARMED = "armed"
    PASSED = "passed"
    FAILED = "failed"


def _ignore(*_args: Any) -> None:
    return None


class ExecutionContext:
    """Completion token for one lifecycle step.

    A hook receives the context as its only argument and completes the step
    by calling ``done()`` or ``fail(error)``, either before returning or
    later from a scheduled callback. If neither happens before the timeout
    elapses the context fails with ``StepTimeoutError``.

    Completion is single-shot: the first ``done()``/``fail()`` disposes the
    context and every later call is ignored.

    Must be started from inside a running event loop.
    """

    def __init__(self, default_timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        """Initialize an unstarted context."""
        self.disposed = False
        self.state = ContextState.CREATED
        self._default_timeout_ms = default_timeout_ms
        self._timeout_ms: int | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Future[Any] | None = None
        self._start_action: Callable[[], Any] = _ignore
        self._passed_callback: Callable[[], None] = _ignore
        self._failed_callback: Callable[[BaseException], None] = _ignore

    def on_start(self, action: Callable[[], Any]) -> None:
        """Register the action invoked by start()."""
        self._start_action = action

    def on_passed(self, callback: Callable[[], None]) -> None:
        """Register the callback fired when the step passes."""
        self._passed_callback = callback

    def on_failed(self, callback: Callable[[BaseException], None]) -> None:
        """Register the callback fired with the error when the step fails."""
        self._failed_callback = callback

    @property
    def timeout(self) -> int | None:
        """Currently armed timeout in milliseconds."""
        return self._timeout_ms

    @timeout.setter
    def timeout(self, value: int) -> None:
        self.set_timeout(value)

    def start(self) -> None:
        """Arm the default timeout and run the start action.

        Exceptions raised by the action fail the context instead of
        propagating. An awaitable returned by the action is scheduled on the
        running loop and its exception, if any, fails the context. The task is
        cancelled when the context is disposed before it finishes.
        """
        self.set_timeout(self._default_timeout_ms)

        try:
            outcome = self._start_action()
        except Exception as error:
            self.fail(error)
            return

        if not inspect.isawaitable(outcome):
            return

        if self.disposed:
            if inspect.iscoroutine(outcome):
                outcome.close()
            return

        self._task = asyncio.ensure_future(outcome)
        self._task.add_done_callback(self._on_task_done)

    def set_timeout(self, timeout_ms: int) -> None:
        """Cancel the armed timer and arm a new one for timeout_ms from now."""
        if self.disposed:
            return

        self._cancel_timer()
        self._timeout_ms = timeout_ms
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(timeout_ms / 1000, self._expire, timeout_ms)
        self.state = ContextState.ARMED

    def done(self) -> None:
        """Signal that the step passed."""
        if self.disposed:
            return

        self.dispose()
        self.state = ContextState.PASSED
        self._passed_callback()

    def fail(self, error: BaseException | str) -> None:
        """Signal that the step failed with error."""
        if self.disposed:
            return

        if isinstance(error, str):
            error = AssertionError(error)

        self.dispose()
        self.state = ContextState.FAILED
        self._failed_callback(error)

    def dispose(self) -> None:
        """Cancel the timer and any pending hook task, then mark terminated.

        A hook task that completes its own context keeps running until its
        next await, where it receives the cancellation.
        """
        self._cancel_timer()
        self.disposed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _expire(self, timeout_ms: int) -> None:
        logger.info(f"Step did not complete within {timeout_ms} ms")
        self.fail(StepTimeoutError(timeout_ms))

    def _on_task_done(self, task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            return

        error = task.exception()
        if error is None:
            return

        if self.disposed:
            logger.warning(
                f"Ignoring error raised after step completion: {error!r}"
            )
            return

        self.fail(error)
