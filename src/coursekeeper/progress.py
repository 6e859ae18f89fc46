"""Learner progress state machine with a write-through state file."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from itertools import chain
from pathlib import Path
from typing import Protocol

from .errors import ExerciseIndexError, ExerciseNotFoundError, StateFileError
from .models import Exercise
from .registry import ExerciseRegistry
from .runner import ExerciseRunner

STATE_FILE_NAME = ".coursekeeper-state.txt"
BAD_INDEX_ERR = "The current exercise index is higher than the number of exercises"

RunFn = Callable[[Exercise], bool]

logger = logging.getLogger(__name__)


class ExercisesProgress(Enum):
    """Outcome of completing the current exercise."""

    ALL_DONE = "all_done"
    PENDING = "pending"


class Reporter(Protocol):
    """Sink for verification-pass progress."""

    def rerunning_all(self) -> None: ...

    def running(self, exercise: Exercise) -> None: ...

    def outcome(self, success: bool) -> None: ...

    def finished(self, final_message: str) -> None: ...


class ProgressState:
    """Track the current exercise and which exercises are done.

    Every mutation of the cursor or of a `done` flag is persisted immediately.
    A failed write raises `StateFileError` but leaves the in-memory change in
    place.
    """

    def __init__(
        self,
        registry: ExerciseRegistry,
        state_path: Path | str = STATE_FILE_NAME,
        run_exercise: RunFn | None = None,
        final_message: str = "",
    ) -> None:
        if len(registry) == 0:
            raise ValueError("Cannot track progress without exercises.")
        self._registry = registry
        self._state_path = Path(state_path)
        self._run_exercise: RunFn = run_exercise if run_exercise is not None else ExerciseRunner()
        self._final_message = final_message
        self._current_exercise_ind = 0
        self._n_done = 0
        self._file_buf = bytearray()
        self._update_from_file()

    def _update_from_file(self) -> None:
        """Restore cursor and done flags from the state file.

        A missing, unreadable or malformed file leaves the defaults in place.
        """
        self._n_done = 0
        try:
            data = self._state_path.read_bytes()
        except OSError as exc:
            logger.debug("No usable state file at %s (%s); starting fresh", self._state_path, exc)
            return

        lines = iter(data.split(b"\n"))
        current_exercise_name = next(lines, None)
        if current_exercise_name is None:
            return
        # The second line is a separator; its content is ignored.
        if next(lines, None) is None:
            logger.debug("Ignoring malformed state file %s", self._state_path)
            return

        done_exercises: set[bytes] = set()
        for done_exercise_name in lines:
            if not done_exercise_name:
                break
            done_exercises.add(done_exercise_name)

        for ind, exercise in enumerate(self._registry):
            name = exercise.name.encode("utf-8")
            if name in done_exercises:
                exercise.done = True
                self._n_done += 1
            if name == current_exercise_name:
                self._current_exercise_ind = ind

        logger.debug(
            "Restored state from %s: current=%s, %d done",
            self._state_path,
            self.current_exercise.name,
            self._n_done,
        )

    @property
    def registry(self) -> ExerciseRegistry:
        return self._registry

    @property
    def exercises(self) -> Sequence[Exercise]:
        return self._registry.exercises

    @property
    def current_exercise_ind(self) -> int:
        return self._current_exercise_ind

    @property
    def current_exercise(self) -> Exercise:
        return self._registry[self._current_exercise_ind]

    @property
    def n_done(self) -> int:
        return self._n_done

    @property
    def final_message(self) -> str:
        return self._final_message

    @property
    def state_path(self) -> Path:
        return self._state_path

    def set_current_exercise_ind(self, ind: int) -> None:
        """Select the exercise at `ind` and persist."""
        if not 0 <= ind < len(self._registry):
            raise ExerciseIndexError(BAD_INDEX_ERR)

        self._current_exercise_ind = ind
        logger.info("Current exercise is now %s", self.current_exercise.name)
        self.write()

    def exercise_ind_by_name(self, name: str) -> int:
        """Return the index of the exercise called `name`."""
        # Linear search; this runs at most a few times per process.
        for ind, exercise in enumerate(self._registry):
            if exercise.name == name:
                return ind
        raise ExerciseNotFoundError(f"No exercise found for '{name}'!")

    def set_current_exercise_by_name(self, name: str) -> None:
        """Select the exercise called `name` and persist."""
        self._current_exercise_ind = self.exercise_ind_by_name(name)
        logger.info("Current exercise is now %s", name)
        self.write()

    def set_pending(self, ind: int) -> None:
        """Mark the exercise at `ind` as pending, persisting only on change."""
        if not 0 <= ind < len(self._registry):
            raise ExerciseIndexError(BAD_INDEX_ERR)

        exercise = self._registry[ind]
        if exercise.done:
            exercise.done = False
            self._n_done -= 1
            logger.info("Exercise %s marked pending", exercise.name)
            self.write()

    def _next_pending_exercise_ind(self) -> int | None:
        """Find the first pending exercise after the current one, wrapping around."""
        current = self._current_exercise_ind
        for ind in chain(range(current + 1, len(self._registry)), range(current)):
            if not self._registry[ind].done:
                return ind
        return None

    def run_current_exercise(self, reporter: Reporter | None = None) -> bool:
        """Run the current exercise once and return whether it passed."""
        exercise = self.current_exercise
        if reporter is not None:
            reporter.running(exercise)
        success = self._run_exercise(exercise)
        if reporter is not None:
            reporter.outcome(success)
        return success

    def done_current_exercise(self, reporter: Reporter) -> ExercisesProgress:
        """Mark the current exercise done and move to the next pending one.

        When no pending exercise is left, every exercise is run again in
        order. The first failing exercise is set back to pending and becomes
        the current one; if all pass, the finish banner is reported.
        """
        exercise = self.current_exercise
        if not exercise.done:
            exercise.done = True
            self._n_done += 1
            logger.info("Exercise %s done (%d/%d)", exercise.name, self._n_done, len(self._registry))

        ind = self._next_pending_exercise_ind()
        if ind is not None:
            self.set_current_exercise_ind(ind)
            return ExercisesProgress.PENDING

        logger.info("No pending exercise left; verifying all exercises")
        reporter.rerunning_all()

        for exercise_ind, exercise in enumerate(self._registry):
            reporter.running(exercise)
            if not self._run_exercise(exercise):
                reporter.outcome(False)
                logger.info("Exercise %s regressed", exercise.name)

                self._current_exercise_ind = exercise_ind
                # Every exercise was done, so no check is needed here.
                exercise.done = False
                self._n_done -= 1

                self.write()
                return ExercisesProgress.PENDING

            reporter.outcome(True)

        reporter.finished(self._final_message)
        return ExercisesProgress.ALL_DONE

    def write(self) -> None:
        """Write the state file.

        Format: the current exercise name, an empty line, then one line per
        done exercise name.
        """
        self._file_buf.clear()

        self._file_buf += self.current_exercise.name.encode("utf-8")
        self._file_buf += b"\n\n"

        for exercise in self._registry:
            if exercise.done:
                self._file_buf += exercise.name.encode("utf-8")
                self._file_buf += b"\n"

        try:
            self._state_path.write_bytes(self._file_buf)
        except OSError as exc:
            raise StateFileError(f"Failed to write the state file {self._state_path}") from exc
        logger.debug("Wrote state file %s (%d done)", self._state_path, self._n_done)
