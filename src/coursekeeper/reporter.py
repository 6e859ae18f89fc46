"""Terminal sink for verification-pass progress."""

from __future__ import annotations

from typing import TextIO

from rich.console import Console

from .models import Exercise

RERUNNING_ALL_EXERCISES_MSG = """
All exercises seem to be done.
Running all exercises again to make sure that all of them are actually done.

"""

FINISH_LINE = """
+----------------------------------------------------+
|          You made it to the finish line!           |
+----------------------------------------------------+

"""


class TerminalReporter:
    """Write verification progress through a rich console.

    Outcomes are tagged as success or failure; rich only emits colour when
    the stream is a terminal and `color` is enabled.
    """

    def __init__(self, stream: TextIO | None = None, color: bool = True) -> None:
        # Exercise names are printed verbatim, never parsed as markup.
        self.console = Console(
            file=stream,
            no_color=not color,
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )

    def rerunning_all(self) -> None:
        self.console.print(RERUNNING_ALL_EXERCISES_MSG, end="")

    def running(self, exercise: Exercise) -> None:
        self.console.print(f"Running {exercise} ... ", end="")

    def outcome(self, success: bool) -> None:
        if success:
            self.console.print("ok", style="green")
        else:
            self.console.print("FAILED", style="red", end="\n\n")

    def finished(self, final_message: str) -> None:
        self.console.print(FINISH_LINE, end="")
        if final_message:
            self.console.print(final_message.rstrip("\n"))
