"""Core domain models for the exercise curriculum."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RunMode(str, Enum):
    """How an exercise is executed to decide whether it passes."""

    RUN = "run"
    TEST = "test"


@dataclass(frozen=True)
class ExerciseInfo:
    """Validated exercise descriptor as read from the info file."""

    name: str
    path: str
    mode: RunMode
    hint: str = ""


@dataclass(eq=False)
class Exercise:
    """One curriculum item owned by the registry.

    Only `done` changes after construction, and only through `ProgressState`.
    """

    name: str
    path: str
    mode: RunMode
    hint: str
    done: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class InfoFile:
    """Parsed curriculum description."""

    exercises: list[ExerciseInfo]
    welcome_message: str = ""
    final_message: str = ""
