"""Execute a single exercise and decide whether it passes."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

from .errors import ExerciseRunError
from .models import Exercise, RunMode

logger = logging.getLogger(__name__)


class ExerciseRunner:
    """Run exercises as blocking subprocesses.

    `run` mode executes the exercise file with the interpreter, `test` mode
    runs pytest on it. Exit status 0 is success; the reason for any other
    outcome is not inspected. No timeout is applied.
    """

    def __init__(self, python: str = sys.executable, cwd: Path | str | None = None) -> None:
        self.python = python
        self.cwd = cwd
        self.last_output = ""

    def command_for(self, exercise: Exercise) -> list[str]:
        """Return the argv used to execute `exercise`."""
        if exercise.mode is RunMode.TEST:
            return [self.python, "-m", "pytest", "-q", exercise.path]
        return [self.python, exercise.path]

    def __call__(self, exercise: Exercise) -> bool:
        cmd = self.command_for(exercise)
        logger.debug("Running %s: %s", exercise.name, " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ExerciseRunError(f"Failed to run exercise '{exercise.name}': {exc}") from exc

        self.last_output = result.stdout or ""
        logger.debug("Exercise %s exited with status %d", exercise.name, result.returncode)
        return result.returncode == 0
