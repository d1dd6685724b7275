"""Errors raised by the fixture runner itself."""


class StepTimeoutError(TimeoutError):
    """Raised into a context when no completion arrives in time."""

    def __init__(self, timeout_ms: int) -> None:
        """Initialize with the timeout that elapsed."""
        super().__init__(f"timeout {timeout_ms} ms.")
        self.timeout_ms = timeout_ms


class FixtureLoadError(ImportError):
    """Raised when a fixture module cannot be imported."""

    def __init__(self, ref: str, reason: str) -> None:
        """Initialize with the fixture reference and the underlying reason."""
        super().__init__(f"Failed to load fixture {ref}: {reason}")
        self.ref = ref
