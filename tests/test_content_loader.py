import json
from collections.abc import Callable
from pathlib import Path

import pytest

from coursekeeper.content_loader import load_info_file
from coursekeeper.models import RunMode

WriteInfo = Callable[[dict[str, object]], Path]


def test_load_info_file(write_info: WriteInfo) -> None:
    path = write_info(
        {
            "welcome_message": "Hello",
            "final_message": "Bye",
            "exercises": [
                {"name": "intro1", "path": "exercises/intro1.py", "hint": "print something"},
                {"name": "lists1", "mode": "TEST"},
            ],
        }
    )

    info = load_info_file(path)

    assert info.welcome_message == "Hello"
    assert info.final_message == "Bye"
    assert [exercise.name for exercise in info.exercises] == ["intro1", "lists1"]
    assert info.exercises[0].mode is RunMode.RUN
    assert info.exercises[0].hint == "print something"
    assert info.exercises[1].mode is RunMode.TEST
    assert info.exercises[1].path == "exercises/lists1.py"


def test_messages_default_to_empty(write_info: WriteInfo) -> None:
    info = load_info_file(write_info({"exercises": [{"name": "a"}], "final_message": None}))
    assert info.welcome_message == ""
    assert info.final_message == ""


def test_null_fields_use_defaults(write_info: WriteInfo) -> None:
    info = load_info_file(write_info({"exercises": [{"name": "a", "path": None, "hint": None, "mode": None}]}))
    exercise = info.exercises[0]
    assert exercise.path == "exercises/a.py"
    assert exercise.hint == ""
    assert exercise.mode is RunMode.RUN


def test_null_name_raises(write_info: WriteInfo) -> None:
    with pytest.raises(ValueError, match="Exercise #1 has no name"):
        load_info_file(write_info({"exercises": [{"name": None}]}))


def test_utf8_bom_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "info.json"
    path.write_text('{"exercises": [{"name": "a"}]}', encoding="utf-8-sig")
    assert load_info_file(path).exercises[0].name == "a"


def test_duplicate_names_raise(write_info: WriteInfo) -> None:
    path = write_info({"exercises": [{"name": "a"}, {"name": "a"}]})
    with pytest.raises(ValueError, match="Duplicate exercise name: a"):
        load_info_file(path)


def test_unknown_mode_raises(write_info: WriteInfo) -> None:
    path = write_info({"exercises": [{"name": "a", "mode": "compile"}]})
    with pytest.raises(ValueError, match="unknown mode 'compile'"):
        load_info_file(path)


def test_missing_name_raises(write_info: WriteInfo) -> None:
    path = write_info({"exercises": [{"name": "a"}, {"path": "b.py"}]})
    with pytest.raises(ValueError, match="Exercise #2 has no name"):
        load_info_file(path)


def test_multiline_name_raises(write_info: WriteInfo) -> None:
    path = write_info({"exercises": [{"name": "a\nb"}]})
    with pytest.raises(ValueError, match="single line"):
        load_info_file(path)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ([], "root must be a JSON object"),
        ({"exercises": {}}, "must be a list"),
        ({"exercises": []}, "no exercises"),
        ({"exercises": ["a"]}, "must be a JSON object"),
    ],
)
def test_invalid_structure_raises(tmp_path: Path, payload: object, message: str) -> None:
    path = tmp_path / "info.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    try:
        load_info_file(path)
        raise AssertionError("Expected ValueError for invalid info file.")
    except ValueError as exc:
        assert message in str(exc)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_info_file(tmp_path / "nope.json")
