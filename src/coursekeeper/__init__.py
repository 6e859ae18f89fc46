"""coursekeeper package: exercise curriculum progress tracking."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

__all__ = ["__version__"]

_SOURCE_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _resolve_version() -> str:
    """Prefer the checkout's pyproject.toml so source runs report the working version."""
    try:
        with _SOURCE_PYPROJECT.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        project = {}
    if project.get("name") == "coursekeeper" and "version" in project:
        return str(project["version"])
    try:
        return version("coursekeeper")
    except PackageNotFoundError:
        return "0+unknown"


__version__ = _resolve_version()
