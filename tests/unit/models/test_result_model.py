"""Tests for result model."""

import pytest
from pydantic import ValidationError

from boostsec.fixture_runner.models.result import Result


def test_result_defaults() -> None:
    """A new result has all counters at zero."""
    result = Result()

    assert (result.total, result.passed, result.failed, result.duration) == (
        0,
        0,
        0,
        0,
    )
    assert result.success


def test_result_add_in_place() -> None:
    """add accumulates every field."""
    result = Result(total=2, passed=1, failed=1, duration=10)

    result.add(Result(total=3, passed=3, failed=0, duration=5))

    assert result == Result(total=5, passed=4, failed=1, duration=15)
    assert not result.success


@pytest.mark.parametrize(
    ("a", "b", "c"),
    [
        (
            Result(total=1, passed=1, duration=2),
            Result(total=2, failed=2, duration=3),
            Result(total=4, passed=3, failed=1, duration=7),
        ),
        (Result(), Result(failed=1), Result(total=9, passed=9, duration=1)),
    ],
)
def test_result_addition_commutative_associative(
    a: Result, b: Result, c: Result
) -> None:
    """Combining results is associative and commutative."""
    assert a + b == b + a
    assert (a + b) + c == a + (b + c)


def test_result_addition_returns_new() -> None:
    """The + operator leaves its operands untouched."""
    a = Result(total=1, passed=1)
    b = Result(total=1, failed=1)

    total = a + b

    assert total == Result(total=2, passed=1, failed=1)
    assert a == Result(total=1, passed=1)


def test_result_rejects_negative() -> None:
    """Counters cannot be negative."""
    with pytest.raises(ValidationError) as exc_info:
        Result(total=-1)
    assert "total" in str(exc_info.value)
