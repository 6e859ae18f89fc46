from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from coursekeeper.models import Exercise, ExerciseInfo, RunMode  # noqa: E402
from coursekeeper.registry import ExerciseRegistry  # noqa: E402


@pytest.fixture(autouse=True)
def _plain_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich from forcing colour onto captured streams."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


class FakeRunner:
    """Runner double returning preset outcomes and recording calls."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[str] = []

    def __call__(self, exercise: Exercise) -> bool:
        self.calls.append(exercise.name)
        return exercise.name not in self.failing


class RecordingReporter:
    """Reporter double collecting emitted events."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def rerunning_all(self) -> None:
        self.events.append(("rerunning_all", None))

    def running(self, exercise: Exercise) -> None:
        self.events.append(("running", exercise.name))

    def outcome(self, success: bool) -> None:
        self.events.append(("outcome", success))

    def finished(self, final_message: str) -> None:
        self.events.append(("finished", final_message))


def make_registry(*names: str) -> ExerciseRegistry:
    return ExerciseRegistry(ExerciseInfo(name=name, path=f"exercises/{name}.py", mode=RunMode.RUN) for name in names)


@pytest.fixture
def write_info(tmp_path: Path) -> Callable[[dict[str, object]], Path]:
    def _write(payload: dict[str, object]) -> Path:
        path = tmp_path / "info.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
