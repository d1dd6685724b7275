"""Load run configuration from YAML files and command-line overrides."""

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from boostsec.fixture_runner.models.config import RunConfig

DEFAULT_CONFIG_FILE = "fixture-runner.yaml"


def load_run_config(config_file: Path) -> RunConfig:
    """Load a run configuration file.

    Args:
        config_file: Path to the YAML configuration

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid or doesn't match schema

    """
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")

    try:
        with config_file.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_file}: {e}") from e

    if data is None:
        raise ValueError(f"Empty config file: {config_file}")

    try:
        return RunConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config schema in {config_file}: {e}") from e


def resolve_run_config(
    config_file: Path | None, overrides: Mapping[str, object]
) -> RunConfig:
    """Merge command-line overrides over the configuration file.

    Without an explicit config_file, the default file is used when present.
    Overrides set to None are ignored.

    Raises:
        FileNotFoundError: If an explicit config_file doesn't exist
        ValueError: If the file or the merged values are invalid

    """
    if config_file is None:
        default_file = Path(DEFAULT_CONFIG_FILE)
        base = load_run_config(default_file) if default_file.exists() else RunConfig()
    else:
        base = load_run_config(config_file)

    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return RunConfig.model_validate({**base.model_dump(), **values})
    except ValidationError as e:
        raise ValueError(f"Invalid run options: {e}") from e
