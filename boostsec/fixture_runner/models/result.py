"""Models for aggregated run results."""

from pydantic import BaseModel, Field


class Result(BaseModel):
    """Pass/fail counters for a fixture or a whole run."""

    total: int = Field(default=0, ge=0, description="Tests accounted for")
    passed: int = Field(default=0, ge=0, description="Tests that passed")
    failed: int = Field(default=0, ge=0, description="Failures, hooks included")
    duration: int = Field(default=0, ge=0, description="Elapsed milliseconds")

    def add(self, other: "Result") -> None:
        """Accumulate another result into this one."""
        self.total += other.total
        self.passed += other.passed
        self.failed += other.failed
        self.duration += other.duration

    def __add__(self, other: "Result") -> "Result":
        """Return the field-wise sum of two results."""
        return Result(
            total=self.total + other.total,
            passed=self.passed + other.passed,
            failed=self.failed + other.failed,
            duration=self.duration + other.duration,
        )

    @property
    def success(self) -> bool:
        """True when nothing failed."""
        return self.failed == 0
