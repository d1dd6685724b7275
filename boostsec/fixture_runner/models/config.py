"""Configuration model for a fixture run."""

from pydantic import BaseModel, Field

DEFAULT_TIMEOUT_MS = 1000
DEFAULT_GLOBAL_MODULE = "global_hooks.py"


class RunConfig(BaseModel):
    """Options controlling discovery and execution of fixtures."""

    paths: list[str] = Field(
        default_factory=lambda: ["."], description="Files or directories to search"
    )
    test: str | None = Field(
        default=None, description="Run only the test with this exact name"
    )
    delay_ms: int = Field(default=0, ge=0, description="Delay before the run starts")
    verbose: bool = Field(default=False, description="Report passing steps too")
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS, gt=0, description="Default per-step timeout"
    )
    global_module: str = Field(
        default=DEFAULT_GLOBAL_MODULE,
        description="Module providing globalSetUp/globalTearDown",
    )
    output_json: bool = Field(default=False, description="Print a JSON summary")
