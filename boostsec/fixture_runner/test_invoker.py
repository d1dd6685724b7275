"""Execution of one test against its fixture's per-test hooks."""

import logging
from types import ModuleType

from boostsec.fixture_runner.hooks import SET_UP, TEAR_DOWN, get_hook
from boostsec.fixture_runner.models.config import DEFAULT_TIMEOUT_MS
from boostsec.fixture_runner.reporter import Reporter
from boostsec.fixture_runner.steps import run_step

logger = logging.getLogger(__name__)


def hook_label(test_name: str, hook_name: str) -> str:
    """Label reported for a per-test hook."""
    return f"{test_name} ---> {hook_name}"


class TestInvoker:
    """Runs setUp, the test body and tearDown for a single test."""

    __test__ = False

    def __init__(
        self,
        reporter: Reporter,
        module: ModuleType,
        test_name: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        """Initialize invoker for test_name defined in module."""
        self.reporter = reporter
        self.module = module
        self.test_name = test_name
        self.timeout_ms = timeout_ms

    async def run(self) -> bool:
        """Run the test and return whether every executed step passed.

        A failing setUp skips the body and tearDown. Once setUp has passed,
        tearDown runs even when the body failed.
        """
        set_up = get_hook(self.module, SET_UP)
        if set_up is not None:
            error = await run_step(set_up, self.timeout_ms)
            self.reporter.on_step_outcome(hook_label(self.test_name, SET_UP), error)
            if error is not None:
                return False

        body = getattr(self.module, self.test_name)
        logger.debug(f"Running test {self.test_name}")
        error = await run_step(body, self.timeout_ms)
        self.reporter.on_step_outcome(self.test_name, error)
        success = error is None

        tear_down = get_hook(self.module, TEAR_DOWN)
        if tear_down is not None:
            error = await run_step(tear_down, self.timeout_ms)
            self.reporter.on_step_outcome(
                hook_label(self.test_name, TEAR_DOWN), error
            )
            if error is not None:
                success = False

        return success
