"""Execution of one fixture's full lifecycle."""

import logging
import time
from collections.abc import Callable
from types import ModuleType

from boostsec.fixture_runner.errors import FixtureLoadError
from boostsec.fixture_runner.hooks import (
    FIXTURE_SET_UP,
    FIXTURE_TEAR_DOWN,
    get_hook,
    get_tests_to_execute,
)
from boostsec.fixture_runner.models.config import DEFAULT_TIMEOUT_MS
from boostsec.fixture_runner.models.result import Result
from boostsec.fixture_runner.reporter import Reporter
from boostsec.fixture_runner.steps import run_step
from boostsec.fixture_runner.test_invoker import TestInvoker

logger = logging.getLogger(__name__)

FixtureLoader = Callable[[str], ModuleType]


class FixtureInvoker:
    """Runs fixtureSetUp, every eligible test and fixtureTearDown."""

    def __init__(
        self,
        reporter: Reporter,
        fixture: str,
        loader: FixtureLoader,
        selected_test: str | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        """Initialize invoker for the fixture reference."""
        self.reporter = reporter
        self.fixture = fixture
        self.loader = loader
        self.selected_test = selected_test
        self.timeout_ms = timeout_ms

    async def run(self) -> Result:
        """Run the fixture and return its result.

        Tests that never ran because fixtureSetUp failed are counted as
        failed. A failing fixtureTearDown counts as one more failed item,
        without re-counting tests that already ran.
        """
        result = Result()
        start_time = time.monotonic()
        self.reporter.on_fixture_start(self.fixture)

        await self._run_lifecycle(result)

        result.duration = int((time.monotonic() - start_time) * 1000)
        self.reporter.on_fixture_done(self.fixture, result)
        return result

    async def _run_lifecycle(self, result: Result) -> None:
        try:
            module = self.loader(self.fixture)
        except FixtureLoadError as e:
            logger.error(f"Could not load fixture {self.fixture}: {e}")
            self.reporter.on_step_outcome(f"{self.fixture} ---> load", e)
            result.failed += 1
            result.total += 1
            return

        test_names = get_tests_to_execute(module, self.selected_test)
        logger.info(f"Fixture {self.fixture}: {len(test_names)} test(s) to run")

        fixture_set_up = get_hook(module, FIXTURE_SET_UP)
        if fixture_set_up is not None:
            error = await run_step(fixture_set_up, self.timeout_ms)
            self.reporter.on_step_outcome(FIXTURE_SET_UP, error)
            if error is not None:
                result.failed += len(test_names)
                result.total += len(test_names)
                return

        for test_name in test_names:
            result.total += 1
            invoker = TestInvoker(self.reporter, module, test_name, self.timeout_ms)
            if await invoker.run():
                result.passed += 1
            else:
                result.failed += 1

        fixture_tear_down = get_hook(module, FIXTURE_TEAR_DOWN)
        if fixture_tear_down is not None:
            error = await run_step(fixture_tear_down, self.timeout_ms)
            self.reporter.on_step_outcome(FIXTURE_TEAR_DOWN, error)
            if error is not None:
                result.failed += 1
                result.total += 1
