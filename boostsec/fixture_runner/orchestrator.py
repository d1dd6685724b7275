"""Suite orchestrator running global hooks around every fixture."""

import asyncio
import logging
from collections.abc import Sequence

from boostsec.fixture_runner.fixture_invoker import FixtureInvoker, FixtureLoader
from boostsec.fixture_runner.hooks import (
    GLOBAL_SET_UP,
    GLOBAL_TEAR_DOWN,
    GlobalHooks,
    Hook,
)
from boostsec.fixture_runner.models.config import DEFAULT_TIMEOUT_MS
from boostsec.fixture_runner.models.result import Result
from boostsec.fixture_runner.reporter import Reporter
from boostsec.fixture_runner.safety_net import SafetyNet
from boostsec.fixture_runner.steps import run_step

logger = logging.getLogger(__name__)

MAX_EXIT_STATUS = 255


def exit_status(result: Result) -> int:
    """Map a total result to a process exit status."""
    return min(result.failed, MAX_EXIT_STATUS)


class SuiteOrchestrator:
    """Runs every fixture once, in order, between the global hooks."""

    def __init__(
        self,
        reporter: Reporter,
        loader: FixtureLoader,
        global_hooks: GlobalHooks | None = None,
        selected_test: str | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        """Initialize orchestrator.

        Args:
            reporter: Receives every run event
            loader: Imports a fixture reference into a module
            global_hooks: Optional hooks run before and after all fixtures
            selected_test: Restrict each fixture to this test name
            timeout_ms: Default timeout of every step

        """
        self.reporter = reporter
        self.loader = loader
        self.global_hooks = global_hooks or GlobalHooks()
        self.selected_test = selected_test
        self.timeout_ms = timeout_ms

    async def run(self, fixtures: Sequence[str]) -> Result:
        """Run the suite and return the total result.

        A failing globalSetUp skips every fixture and globalTearDown.
        """
        total = Result()
        safety_net = SafetyNet(self.reporter)

        with safety_net.installed(asyncio.get_running_loop()):
            set_up_passed = await self._run_global_hook(
                GLOBAL_SET_UP, self.global_hooks.set_up, total
            )
            if set_up_passed:
                logger.info(f"Running {len(fixtures)} fixture(s)")
                for fixture in fixtures:
                    invoker = FixtureInvoker(
                        self.reporter,
                        fixture,
                        self.loader,
                        self.selected_test,
                        self.timeout_ms,
                    )
                    total.add(await invoker.run())

                await self._run_global_hook(
                    GLOBAL_TEAR_DOWN, self.global_hooks.tear_down, total
                )

        total.failed += safety_net.unattributed_failures
        total.total += safety_net.unattributed_failures

        logger.info(
            f"Suite completed: {total.total} total, {total.passed} passed, "
            f"{total.failed} failed"
        )
        self.reporter.on_suite_done(total)
        return total

    async def _run_global_hook(
        self, label: str, hook: Hook | None, total: Result
    ) -> bool:
        """Run an optional global hook; a failure counts once in total."""
        if hook is None:
            return True

        error = await run_step(hook, self.timeout_ms)
        self.reporter.on_step_outcome(label, error)
        if error is not None:
            total.failed += 1
            return False
        return True
