"""Exceptions raised by coursekeeper."""

from __future__ import annotations


class CoursekeeperError(Exception):
    """Base class for user-facing coursekeeper failures."""


class ExerciseIndexError(CoursekeeperError, IndexError):
    """An exercise index is outside the registry."""


class ExerciseNotFoundError(CoursekeeperError, KeyError):
    """No exercise has the requested name."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0]) if self.args else ""


class StateFileError(CoursekeeperError, OSError):
    """The state file could not be written."""


class ExerciseRunError(CoursekeeperError):
    """An exercise command could not be launched."""
