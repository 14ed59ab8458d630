"""Interactive numbered menu driving a Stopwatch."""

from collections.abc import Callable

from rich.console import Console
from rich.prompt import Confirm, FloatPrompt, IntPrompt

from stopwatch_cli.models.stopwatch import (
    MAX_INTERVAL,
    MIN_INTERVAL,
    Stopwatch,
    StopwatchDisplay,
)
from stopwatch_cli.models.stopwatch.state import is_valid_interval
from stopwatch_cli.models.stopwatch.ui import MENU_ITEMS
from stopwatch_cli.utils.exit_codes import SUCCESS
from stopwatch_cli.utils.logger import get_logger

EXIT_CHOICE = len(MENU_ITEMS)


class StopwatchShell:
    """Reads menu choices and forwards them to the stopwatch."""

    def __init__(self, stopwatch: Stopwatch, display: StopwatchDisplay):
        self.stopwatch = stopwatch
        self.display = display
        self._actions: dict[int, Callable[[], None]] = {
            1: self.do_start,
            2: self.do_pause,
            3: self.do_stop,
            4: self.do_reset,
            5: self.do_display,
            6: self.do_set_interval,
            7: self.do_lap,
            8: self.do_list_laps,
            9: self.display.show_help,
        }

    @property
    def console(self) -> Console:
        return self.display.console

    def run(self) -> int:
        """Loop until the user exits. Returns the process exit code."""
        self.display.show_welcome()
        while True:
            self.display.show_menu()
            try:
                choice = self.ask_choice()
                if choice == EXIT_CHOICE:
                    return SUCCESS
                self.handle(choice)
            except (KeyboardInterrupt, EOFError):
                self.console.print()
                get_logger().info("shell interrupted, exiting")
                return SUCCESS

    def handle(self, choice: int) -> None:
        get_logger().debug("menu choice %d", choice)
        self._actions[choice]()

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def ask_choice(self) -> int:
        """Prompt until a menu number between 1 and 10 is entered."""
        while True:
            choice = IntPrompt.ask(
                f"Enter your choice (1-{EXIT_CHOICE})", console=self.console
            )
            if 1 <= choice <= EXIT_CHOICE:
                return choice
            self.console.print(
                f"[red]Invalid input. Please enter a number between 1 and {EXIT_CHOICE}.[/red]"
            )

    def ask_interval(self) -> float:
        """Prompt until a display interval within bounds is entered."""
        while True:
            interval = FloatPrompt.ask(
                f"Enter new display interval in seconds ({MIN_INTERVAL:g} to {MAX_INTERVAL:g})",
                console=self.console,
            )
            if is_valid_interval(interval):
                return interval
            self.console.print(
                f"[red]Invalid input. Please enter a number between "
                f"{MIN_INTERVAL:g} and {MAX_INTERVAL:g}.[/red]"
            )

    # ------------------------------------------------------------------
    # Menu actions
    # ------------------------------------------------------------------

    def do_start(self) -> None:
        self.display.show_result(self.stopwatch.start())

    def do_pause(self) -> None:
        self.display.show_result(self.stopwatch.pause())

    def do_stop(self) -> None:
        self.display.show_result(self.stopwatch.stop())

    def do_reset(self) -> None:
        confirmed = Confirm.ask(
            "Are you sure you want to reset the stopwatch?",
            default=False,
            console=self.console,
        )
        self.display.show_result(self.stopwatch.reset(confirmed=confirmed))

    def do_display(self) -> None:
        self.display.show_frame(self.stopwatch.render())

    def do_set_interval(self) -> None:
        interval = self.ask_interval()
        self.display.show_result(self.stopwatch.set_display_interval(interval))

    def do_lap(self) -> None:
        self.display.show_result(self.stopwatch.lap())

    def do_list_laps(self) -> None:
        self.display.show_laps(self.stopwatch.list_laps())
