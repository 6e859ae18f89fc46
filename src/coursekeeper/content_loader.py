"""Load the curriculum description from an info JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .models import ExerciseInfo, InfoFile, RunMode

DEFAULT_INFO_FILE = "info.json"
DEFAULT_EXERCISES_DIR = "exercises"

logger = logging.getLogger(__name__)


def _exercise_from_dict(position: int, raw: Any) -> ExerciseInfo:
    """Build an exercise descriptor from raw JSON content."""
    if not isinstance(raw, dict):
        raise ValueError(f"Exercise #{position} must be a JSON object.")

    name = str(raw.get("name") or "").strip()
    if not name:
        raise ValueError(f"Exercise #{position} has no name.")
    if "\n" in name or "\r" in name:
        raise ValueError(f"Exercise name '{name}' must be a single line.")

    path = str(raw.get("path") or "").strip()
    if not path:
        path = f"{DEFAULT_EXERCISES_DIR}/{name}.py"

    raw_mode = str(raw.get("mode") or RunMode.RUN.value).strip().lower()
    try:
        mode = RunMode(raw_mode)
    except ValueError:
        known = ", ".join(item.value for item in RunMode)
        raise ValueError(f"Exercise '{name}' has unknown mode '{raw_mode}' (expected one of: {known}).") from None

    return ExerciseInfo(name=name, path=path, mode=mode, hint=str(raw.get("hint") or ""))


def _info_from_dict(raw: Any) -> InfoFile:
    """Build the curriculum description from the info file root object."""
    if not isinstance(raw, dict):
        raise ValueError("Info file root must be a JSON object.")

    raw_exercises = raw.get("exercises", [])
    if not isinstance(raw_exercises, list):
        raise ValueError("Info file 'exercises' must be a list.")

    exercises = [_exercise_from_dict(position, item) for position, item in enumerate(raw_exercises, start=1)]
    if not exercises:
        raise ValueError("Info file lists no exercises.")
    _validate_unique_names(exercises)

    return InfoFile(
        exercises=exercises,
        welcome_message=str(raw.get("welcome_message") or ""),
        final_message=str(raw.get("final_message") or ""),
    )


def load_info_file(path: Path | str = DEFAULT_INFO_FILE) -> InfoFile:
    """Load and validate the info file at `path`."""
    file_path = Path(path)
    raw = json.loads(file_path.read_text(encoding="utf-8-sig"))
    info = _info_from_dict(raw)
    logger.debug("Loaded %d exercises from %s", len(info.exercises), file_path)
    return info


def _validate_unique_names(exercises: list[ExerciseInfo]) -> None:
    """Validate that exercise names are unique, since they key the state file."""
    seen: set[str] = set()
    for exercise in exercises:
        if exercise.name in seen:
            raise ValueError(f"Duplicate exercise name: {exercise.name}")
        seen.add(exercise.name)
