"""Ordered exercise catalog."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .models import Exercise, ExerciseInfo


class ExerciseRegistry:
    """Fixed-order collection of exercises.

    Membership and order never change after construction. The `Exercise`
    objects are shared by reference with every reader.
    """

    def __init__(self, infos: Iterable[ExerciseInfo]) -> None:
        self._exercises: tuple[Exercise, ...] = tuple(
            Exercise(name=info.name, path=info.path, mode=info.mode, hint=info.hint.strip()) for info in infos
        )

    @property
    def exercises(self) -> Sequence[Exercise]:
        """Return all exercises in curriculum order."""
        return self._exercises

    def __len__(self) -> int:
        return len(self._exercises)

    def __getitem__(self, ind: int) -> Exercise:
        return self._exercises[ind]

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self._exercises)
