"""Reporters receiving run events as they happen."""

import traceback
from collections.abc import Sequence
from typing import Any, Protocol

import typer

from boostsec.fixture_runner.models.result import Result

VERSION = "1.0"

SEPARATOR = "-" * 41


class Reporter(Protocol):
    """Sink for run events. Never read back by the runner."""

    def on_version(self) -> None:
        """Announce the runner version."""

    def on_fixture_start(self, fixture: str) -> None:
        """Announce that a fixture is about to run."""

    def on_step_outcome(self, label: str, error: BaseException | None) -> None:
        """Report one executed lifecycle step; error is None on success."""

    def on_fixture_done(self, fixture: str, result: Result) -> None:
        """Report a finished fixture with its result."""

    def on_suite_done(self, result: Result) -> None:
        """Report the total result of the run."""


def format_counts(result: Result) -> str:
    """Render result counters as a one-line summary."""
    return (
        f"{result.total} tests, {result.passed} passed, "
        f"{result.failed} failed, took {result.duration}ms."
    )


class ConsoleReporter:
    """Human-readable report written to stdout."""

    def __init__(self, verbose: bool = False) -> None:
        """Initialize reporter; verbose also prints passing steps."""
        self.verbose = verbose

    def on_version(self) -> None:
        """Print the version banner."""
        typer.echo(f"\nFixtureRunner version: {VERSION}")

    def on_fixture_start(self, fixture: str) -> None:
        """Print the fixture header."""
        typer.echo("\n\n------ Fixture start --------------------")
        typer.echo(fixture)
        typer.echo(SEPARATOR + "\n\n")

    def on_step_outcome(self, label: str, error: BaseException | None) -> None:
        """Print a failed step, or a passing one in verbose mode."""
        if error is None:
            if self.verbose:
                typer.secho(f"\n>> Test '{label}' Passed.", fg=typer.colors.GREEN)
            return

        typer.secho(f"\n>> Test '{label}' failed.", fg=typer.colors.RED)
        for line in describe_error(error):
            typer.echo(f"    {line}")

    def on_fixture_done(self, fixture: str, result: Result) -> None:
        """Print the fixture counters."""
        typer.echo("\n\n------ Fixture end ----------------------")
        typer.echo(format_counts(result))
        typer.echo(SEPARATOR)

    def on_suite_done(self, result: Result) -> None:
        """Print the total counters."""
        typer.echo(f"\n\n========== Total: {format_counts(result)}  ==========\n\n")


def describe_error(error: BaseException) -> list[str]:
    """Return the lines printed for a failed step.

    Assertion errors carrying ``expected``/``actual``/``operator``
    attributes get those listed before the traceback.
    """
    lines: list[str] = []
    if isinstance(error, AssertionError):
        details = {
            name: getattr(error, name)
            for name in ("actual", "expected", "operator")
            if hasattr(error, name)
        }
        if details:
            lines.append(f"message: {error}")
            lines.extend(f"{name}: {value!r}" for name, value in details.items())

    if error.__traceback__ is not None:
        lines.extend(
            "".join(traceback.format_exception(error)).rstrip().splitlines()
        )
    else:
        lines.append(f"{type(error).__name__}: {error}")
    return lines


class SummaryReporter:
    """Records per-fixture results for the JSON summary."""

    def __init__(self) -> None:
        """Initialize an empty summary."""
        self.fixtures: list[tuple[str, Result]] = []
        self.total: Result | None = None

    def on_version(self) -> None:
        """Ignore."""

    def on_fixture_start(self, fixture: str) -> None:
        """Ignore."""

    def on_step_outcome(self, label: str, error: BaseException | None) -> None:
        """Ignore."""

    def on_fixture_done(self, fixture: str, result: Result) -> None:
        """Record the fixture result."""
        self.fixtures.append((fixture, result.model_copy()))

    def on_suite_done(self, result: Result) -> None:
        """Record the total result."""
        self.total = result.model_copy()

    def to_dict(self) -> dict[str, Any]:
        """Format recorded results for JSON output."""
        total = self.total or Result()
        return {
            **total.model_dump(),
            "fixtures": [
                {"fixture": fixture, **result.model_dump()}
                for fixture, result in self.fixtures
            ],
        }


class CompositeReporter:
    """Fans every event out to several reporters in order."""

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        """Initialize with the reporters to notify."""
        self.reporters = list(reporters)

    def on_version(self) -> None:
        """Forward."""
        for reporter in self.reporters:
            reporter.on_version()

    def on_fixture_start(self, fixture: str) -> None:
        """Forward."""
        for reporter in self.reporters:
            reporter.on_fixture_start(fixture)

    def on_step_outcome(self, label: str, error: BaseException | None) -> None:
        """Forward."""
        for reporter in self.reporters:
            reporter.on_step_outcome(label, error)

    def on_fixture_done(self, fixture: str, result: Result) -> None:
        """Forward."""
        for reporter in self.reporters:
            reporter.on_fixture_done(fixture, result)

    def on_suite_done(self, result: Result) -> None:
        """Forward."""
        for reporter in self.reporters:
            reporter.on_suite_done(result)
