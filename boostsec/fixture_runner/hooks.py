"""Names and lookup of the hooks a fixture module may define."""

from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from boostsec.fixture_runner.context import ExecutionContext

Hook = Callable[[ExecutionContext], Any]

TEST_PREFIX = "test"
SET_UP = "setUp"
TEAR_DOWN = "tearDown"
FIXTURE_SET_UP = "fixtureSetUp"
FIXTURE_TEAR_DOWN = "fixtureTearDown"
GLOBAL_SET_UP = "globalSetUp"
GLOBAL_TEAR_DOWN = "globalTearDown"


def get_hook(module: ModuleType, name: str) -> Hook | None:
    """Return the named hook if the module defines a callable by that name."""
    hook = getattr(module, name, None)
    return hook if callable(hook) else None


def get_tests_to_execute(
    module: ModuleType, selected_test: str | None = None
) -> list[str]:
    """List test names in declaration order.

    Args:
        module: Loaded fixture module
        selected_test: When given, only this exact name is eligible

    Returns:
        Names of callables starting with the test prefix; empty when
        selected_test is not defined by the module

    """
    test_names: list[str] = []
    for name, value in vars(module).items():
        if not name.startswith(TEST_PREFIX) or not callable(value):
            continue

        if selected_test and name != selected_test:
            continue

        test_names.append(name)

    return test_names


@dataclass(frozen=True, kw_only=True)
class GlobalHooks:
    """Hooks run once around the whole suite."""

    set_up: Hook | None = None
    tear_down: Hook | None = None

    @classmethod
    def from_module(cls, module: ModuleType) -> "GlobalHooks":
        """Collect globalSetUp/globalTearDown from a module."""
        return cls(
            set_up=get_hook(module, GLOBAL_SET_UP),
            tear_down=get_hook(module, GLOBAL_TEAR_DOWN),
        )
