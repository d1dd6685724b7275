"""Tests for running a single step."""

import asyncio

from boostsec.fixture_runner.context import ExecutionContext
from boostsec.fixture_runner.errors import StepTimeoutError
from boostsec.fixture_runner.steps import run_step


async def test_run_step_passed() -> None:
    """run_step returns None when the hook calls done."""
    assert await run_step(lambda ctx: ctx.done()) is None


async def test_run_step_raised() -> None:
    """run_step returns the error raised by the hook."""

    def hook(ctx: ExecutionContext) -> None:
        raise RuntimeError("boom")

    error = await run_step(hook)

    assert isinstance(error, RuntimeError)
    assert str(error) == "boom"


async def test_run_step_deferred() -> None:
    """run_step waits for a completion scheduled on the loop."""
    order: list[str] = []

    def hook(ctx: ExecutionContext) -> None:
        def finish() -> None:
            order.append("finished")
            ctx.done()

        asyncio.get_running_loop().call_later(0.01, finish)

    error = await run_step(hook)
    order.append("returned")

    assert error is None
    assert order == ["finished", "returned"]


async def test_run_step_timeout() -> None:
    """run_step returns a timeout error for a silent hook."""
    error = await run_step(lambda ctx: None, timeout_ms=20)

    assert isinstance(error, StepTimeoutError)
    assert error.timeout_ms == 20


async def test_run_step_receives_context() -> None:
    """The hook receives a fresh context as its only argument."""
    received: list[ExecutionContext] = []

    def hook(ctx: ExecutionContext) -> None:
        received.append(ctx)
        ctx.done()

    await run_step(hook)
    await run_step(hook)

    assert len(received) == 2
    assert received[0] is not received[1]
    assert all(ctx.disposed for ctx in received)
