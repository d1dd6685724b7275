"""Discover and import fixture modules from the filesystem."""

import hashlib
import importlib.util
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType

from boostsec.fixture_runner.errors import FixtureLoadError
from boostsec.fixture_runner.hooks import GlobalHooks

logger = logging.getLogger(__name__)

FIXTURE_SUFFIX = "_fixture.py"


def split_paths(values: Sequence[str]) -> list[str]:
    """Expand comma-separated path options into a flat list."""
    paths = [p.strip() for value in values for p in value.split(",") if p.strip()]
    return paths or ["."]


def find_fixtures(paths: Sequence[str]) -> list[str]:
    """Find fixture files under the given paths.

    Args:
        paths: Files or directories; directories are walked recursively
            in sorted order

    Returns:
        Fixture references (file paths) in discovery order

    Raises:
        FileNotFoundError: If a path does not exist

    """
    fixtures: list[str] = []
    for path in paths:
        _find_fixture(fixtures, Path(path))

    logger.info(f"Found {len(fixtures)} fixture(s)")
    return fixtures


def _find_fixture(fixtures: list[str], path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Fixture path not found: {path}")

    if path.is_dir():
        for item in sorted(path.iterdir()):
            _find_fixture(fixtures, item)
        return

    if path.name.endswith(FIXTURE_SUFFIX):
        fixtures.append(str(path))


def load_fixture(ref: str) -> ModuleType:
    """Import a fixture file as a module.

    The module is registered under a name unique to its absolute path. The
    file's directory is on sys.path only while the module body executes, so
    siblings must be imported at module level.

    Raises:
        FixtureLoadError: If the file cannot be imported

    """
    path = Path(ref).resolve()
    digest = hashlib.sha1(str(path).encode()).hexdigest()[:8]
    module_name = f"{path.stem}_{digest}"

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise FixtureLoadError(ref, "not an importable Python file")

    parent = str(path.parent)
    added_to_path = parent not in sys.path
    if added_to_path:
        sys.path.insert(0, parent)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[module_name]
        raise FixtureLoadError(ref, f"{type(e).__name__}: {e}") from e
    finally:
        if added_to_path:
            sys.path.remove(parent)

    return module


def load_global_hooks(path: str) -> GlobalHooks | None:
    """Load global hooks from path, or None when the file does not exist.

    Raises:
        FixtureLoadError: If the file exists but cannot be imported

    """
    if not Path(path).is_file():
        logger.info(f"No global module at {path}")
        return None

    return GlobalHooks.from_module(load_fixture(path))
