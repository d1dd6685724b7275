"""CLI entry point for the fixture runner."""

import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import typer

from boostsec.fixture_runner.config_loader import resolve_run_config
from boostsec.fixture_runner.errors import FixtureLoadError
from boostsec.fixture_runner.fixture_finder import (
    find_fixtures,
    load_fixture,
    load_global_hooks,
    split_paths,
)
from boostsec.fixture_runner.models.result import Result
from boostsec.fixture_runner.orchestrator import SuiteOrchestrator, exit_status
from boostsec.fixture_runner.reporter import (
    CompositeReporter,
    ConsoleReporter,
    SummaryReporter,
)

logger = logging.getLogger(__name__)

app = typer.Typer()


def configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr; stdout carries the report."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,  # Force reconfiguration even if already set up
    )


async def run_suite(
    orchestrator: SuiteOrchestrator, fixtures: Sequence[str], delay_ms: int
) -> Result:
    """Wait for the startup delay, then run the suite."""
    if delay_ms:
        logger.info(f"Delaying start by {delay_ms} ms")
        await asyncio.sleep(delay_ms / 1000)
    return await orchestrator.run(fixtures)


@app.command()
def main(
    path: Optional[list[str]] = typer.Option(  # noqa: B008
        None, "--path", "-p", help="Fixture files or directories, comma-separated"
    ),
    test: Optional[str] = typer.Option(
        None, "--test", "-t", help="Run only the test with this name"
    ),
    delay: Optional[int] = typer.Option(
        None, "--delay", help="Milliseconds to wait before running"
    ),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", help="Default per-step timeout in milliseconds"
    ),
    global_module: Optional[str] = typer.Option(
        None, "--global-module", help="File defining globalSetUp/globalTearDown"
    ),
    config: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML configuration file"
    ),
    verbose: Optional[bool] = typer.Option(
        None, "--verbose/--quiet", "-v", help="Report passes"
    ),
    output_json: Optional[bool] = typer.Option(
        None, "--json/--no-json", help="Print a JSON summary"
    ),
    version: bool = typer.Option(False, "--version", help="Print version and exit"),
) -> None:
    """Discover fixtures and run their tests."""
    if version:
        ConsoleReporter().on_version()
        return

    try:
        run_config = resolve_run_config(
            config,
            {
                "paths": split_paths(path) if path else None,
                "test": test,
                "delay_ms": delay,
                "timeout_ms": timeout,
                "global_module": global_module,
                "verbose": verbose,
                "output_json": output_json,
            },
        )
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    configure_logging(run_config.verbose)
    console = ConsoleReporter(verbose=run_config.verbose)
    console.on_version()

    try:
        fixtures = find_fixtures(run_config.paths)
        global_hooks = load_global_hooks(run_config.global_module)
    except (FileNotFoundError, FixtureLoadError) as e:
        logger.error(f"Failed to prepare run: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    summary = SummaryReporter()
    orchestrator = SuiteOrchestrator(
        CompositeReporter([console, summary]),
        load_fixture,
        global_hooks=global_hooks,
        selected_test=run_config.test,
        timeout_ms=run_config.timeout_ms,
    )
    result = asyncio.run(run_suite(orchestrator, fixtures, run_config.delay_ms))

    if run_config.output_json:
        typer.echo(json.dumps(summary.to_dict(), indent=2))

    raise typer.Exit(code=exit_status(result))


if __name__ == "__main__":  # pragma: no cover
    app()
