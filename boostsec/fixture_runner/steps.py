"""Running a single lifecycle step to completion."""

import asyncio
import logging

from boostsec.fixture_runner.context import ExecutionContext
from boostsec.fixture_runner.hooks import Hook
from boostsec.fixture_runner.models.config import DEFAULT_TIMEOUT_MS
from boostsec.fixture_runner.safety_net import activate

logger = logging.getLogger(__name__)


async def run_step(
    hook: Hook, timeout_ms: int = DEFAULT_TIMEOUT_MS
) -> BaseException | None:
    """Run hook in a fresh context and wait for it to pass or fail.

    Args:
        hook: Callable receiving the context as its only argument
        timeout_ms: Timeout armed when the step starts

    Returns:
        None if the step passed, otherwise the error it failed with

    """
    loop = asyncio.get_running_loop()
    outcome: asyncio.Future[BaseException | None] = loop.create_future()
    context = ExecutionContext(default_timeout_ms=timeout_ms)

    def passed() -> None:
        if not outcome.done():
            outcome.set_result(None)

    def failed(error: BaseException) -> None:
        if not outcome.done():
            outcome.set_result(error)

    context.on_start(lambda: hook(context))
    context.on_passed(passed)
    context.on_failed(failed)

    logger.debug(f"Starting step {getattr(hook, '__qualname__', hook)}")
    activate(context)
    context.start()

    return await outcome
