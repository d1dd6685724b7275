"""Data models for run configuration and results."""

from boostsec.fixture_runner.models.config import RunConfig
from boostsec.fixture_runner.models.result import Result

__all__ = [
    "Result",
    "RunConfig",
]
