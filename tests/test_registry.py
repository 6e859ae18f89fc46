from coursekeeper.models import Exercise, ExerciseInfo, RunMode
from coursekeeper.registry import ExerciseRegistry


def test_registry_keeps_order_and_starts_pending() -> None:
    registry = ExerciseRegistry(
        [
            ExerciseInfo(name="intro1", path="exercises/intro1.py", mode=RunMode.RUN, hint="  run it \n"),
            ExerciseInfo(name="lists1", path="exercises/lists1.py", mode=RunMode.TEST),
        ]
    )

    assert len(registry) == 2
    assert [exercise.name for exercise in registry] == ["intro1", "lists1"]
    assert registry[1].mode is RunMode.TEST
    assert registry[0].hint == "run it"
    assert all(exercise.done is False for exercise in registry.exercises)


def test_registry_shares_exercise_objects() -> None:
    registry = ExerciseRegistry([ExerciseInfo(name="a", path="a.py", mode=RunMode.RUN)])
    first = registry[0]
    first.done = True
    assert registry.exercises[0] is first
    assert registry[0].done is True


def test_exercises_sequence_is_read_only() -> None:
    registry = ExerciseRegistry([ExerciseInfo(name="a", path="a.py", mode=RunMode.RUN)])
    exercises = registry.exercises
    assert isinstance(exercises, tuple)
    assert isinstance(exercises[0], Exercise)
    assert str(exercises[0]) == "a"


def test_empty_registry() -> None:
    registry = ExerciseRegistry([])
    assert len(registry) == 0
    assert list(registry) == []
