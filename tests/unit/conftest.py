"""Shared fixtures for fixture runner tests."""

from collections.abc import Callable
from types import ModuleType
from typing import Any

import pytest

from boostsec.fixture_runner.models.result import Result


class RecordingReporter:
    """Reporter keeping every event for assertions."""

    def __init__(self) -> None:
        """Initialize with no events."""
        self.events: list[tuple[Any, ...]] = []

    def on_version(self) -> None:
        """Record version event."""
        self.events.append(("version",))

    def on_fixture_start(self, fixture: str) -> None:
        """Record fixture start."""
        self.events.append(("fixture_start", fixture))

    def on_step_outcome(self, label: str, error: BaseException | None) -> None:
        """Record step outcome."""
        self.events.append(("step", label, error))

    def on_fixture_done(self, fixture: str, result: Result) -> None:
        """Record fixture done."""
        self.events.append(("fixture_done", fixture, result.model_copy()))

    def on_suite_done(self, result: Result) -> None:
        """Record suite done."""
        self.events.append(("suite_done", result.model_copy()))

    @property
    def steps(self) -> list[tuple[str, BaseException | None]]:
        """Step outcomes as (label, error) pairs."""
        return [(e[1], e[2]) for e in self.events if e[0] == "step"]

    @property
    def failed_labels(self) -> list[str]:
        """Labels of failed steps."""
        return [label for label, error in self.steps if error is not None]


@pytest.fixture
def reporter() -> RecordingReporter:
    """Create recording reporter."""
    return RecordingReporter()


@pytest.fixture
def make_module() -> Callable[..., ModuleType]:
    """Build an in-memory fixture module with attributes in given order."""

    def factory(name: str = "sample_fixture", **attrs: Any) -> ModuleType:
        module = ModuleType(name)
        for attr_name, value in attrs.items():
            setattr(module, attr_name, value)
        return module

    return factory
