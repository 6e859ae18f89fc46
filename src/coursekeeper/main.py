"""CLI entrypoint for working through an exercise curriculum."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from . import __version__
from .content_loader import DEFAULT_INFO_FILE, load_info_file
from .errors import CoursekeeperError
from .models import InfoFile
from .progress import STATE_FILE_NAME, ExercisesProgress, ProgressState
from .registry import ExerciseRegistry
from .reporter import TerminalReporter
from .runner import ExerciseRunner

PrintFn = Callable[[str], None]

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coursekeeper", description="Work through an exercise curriculum")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--info", default=DEFAULT_INFO_FILE, help="curriculum info file (default: %(default)s)")
    parser.add_argument("--state", default=STATE_FILE_NAME, help="progress state file (default: %(default)s)")
    parser.add_argument("--no-color", action="store_true", help="disable coloured output")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("list", help="list exercises and their state")
    commands.add_parser("status", help="show the current exercise and overall progress")
    commands.add_parser("hint", help="show the hint of the current exercise")
    run_parser = commands.add_parser("run", help="run the current (or named) exercise")
    run_parser.add_argument("name", nargs="?", help="exercise to select before running")
    select_parser = commands.add_parser("select", help="select an exercise by 1-based index or name")
    select_parser.add_argument("target", help="1-based index, or exercise name")
    select_parser.add_argument(
        "--name", dest="by_name", action="store_true", help="treat TARGET as a name even when it is all digits"
    )
    reset_parser = commands.add_parser("reset", help="mark an exercise as pending again")
    reset_parser.add_argument("name")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _progress_state(info: InfoFile, state_path: Path, runner: ExerciseRunner) -> ProgressState:
    """Create the progress state machine for the loaded curriculum."""
    registry = ExerciseRegistry(info.exercises)
    return ProgressState(registry, state_path, run_exercise=runner, final_message=info.final_message)


def run(argv: list[str] | None = None, print_fn: PrintFn = print) -> int:
    """Run the CLI application."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    command = args.command or "status"

    try:
        info = load_info_file(args.info)
    except FileNotFoundError:
        print(f"Error: info file not found: {args.info}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    state_path = Path(args.state)
    first_run = not state_path.exists()
    runner = ExerciseRunner()
    try:
        state = _progress_state(info, state_path, runner)
        if first_run and info.welcome_message:
            print_fn(info.welcome_message.rstrip("\n"))

        if command == "list":
            _list_flow(state, print_fn)
        elif command == "status":
            _status_flow(state, print_fn)
        elif command == "hint":
            _hint_flow(state, print_fn)
        elif command == "select":
            _select_flow(state, args.target, args.by_name, print_fn)
        elif command == "reset":
            _reset_flow(state, args.name, print_fn)
        elif command == "run":
            reporter = TerminalReporter(color=not args.no_color)
            return _run_flow(state, runner, reporter, args.name, print_fn)
    except CoursekeeperError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _list_flow(state: ProgressState, print_fn: PrintFn) -> None:
    """Print every exercise with its state."""
    rows: list[tuple[str, str, str, str]] = []
    for ind, exercise in enumerate(state.exercises):
        marker = ">" if ind == state.current_exercise_ind else " "
        rows.append((f"{marker}{ind + 1}", exercise.name, exercise.path, "done" if exercise.done else "pending"))

    num_width = max(len(" #"), max(len(row[0]) for row in rows))
    name_width = max(len("Name"), max(len(row[1]) for row in rows))
    path_width = max(len("Path"), max(len(row[2]) for row in rows))
    print_fn(f"{' #':<{num_width}} {'Name':<{name_width}} {'Path':<{path_width}} State")
    print_fn("-" * (num_width + name_width + path_width + len(" State") + 2))
    for num, name, path, status in rows:
        print_fn(f"{num:<{num_width}} {name:<{name_width}} {path:<{path_width}} {status}")
    print_fn(f"\nProgress: {state.n_done}/{len(state.exercises)}")


def _status_flow(state: ProgressState, print_fn: PrintFn) -> None:
    """Print the current exercise and overall progress."""
    exercise = state.current_exercise
    print_fn(f"Current exercise: {exercise.name} ({exercise.path})")
    print_fn(f"Progress: {state.n_done}/{len(state.exercises)} exercises done")


def _hint_flow(state: ProgressState, print_fn: PrintFn) -> None:
    exercise = state.current_exercise
    print_fn(exercise.hint or f"No hint for {exercise.name}.")


def _select_flow(state: ProgressState, target: str, by_name: bool, print_fn: PrintFn) -> None:
    """Select by 1-based index when `target` is ASCII digits, else by name."""
    if not by_name and target.isascii() and target.isdigit():
        state.set_current_exercise_ind(int(target) - 1)
    else:
        state.set_current_exercise_by_name(target)
    print_fn(f"Current exercise: {state.current_exercise.name}")


def _reset_flow(state: ProgressState, name: str, print_fn: PrintFn) -> None:
    state.set_pending(state.exercise_ind_by_name(name))
    print_fn(f"Exercise '{name}' is pending.")


def _run_flow(
    state: ProgressState,
    runner: ExerciseRunner,
    reporter: TerminalReporter,
    name: str | None,
    print_fn: PrintFn,
) -> int:
    """Run the current exercise and advance when it passes."""
    if name:
        state.set_current_exercise_by_name(name)

    exercise = state.current_exercise
    success = state.run_current_exercise(reporter)
    if runner.last_output:
        print_fn(runner.last_output.rstrip("\n"))
    if not success:
        print_fn(f"\nExercise {exercise.name} failed. Edit {exercise.path} and run again.")
        if exercise.hint:
            print_fn("Run `coursekeeper hint` for a hint.")
        return 1

    progress = state.done_current_exercise(reporter)
    if progress is ExercisesProgress.ALL_DONE:
        return 0

    following = state.current_exercise
    print_fn(f"\nNext exercise: {following.name} ({following.path})")
    print_fn(f"Progress: {state.n_done}/{len(state.exercises)} exercises done")
    return 0


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
