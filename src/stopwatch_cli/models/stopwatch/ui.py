"""Terminal rendering for the stopwatch shell."""

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .formatting import format_elapsed
from .state import Lap, OperationResult, RenderedFrame

STATUS_COLORS = {
    "running": "cyan",
    "paused": "yellow",
    "stopped": "green",
}

MENU_ITEMS = (
    "Start/Resume",
    "Pause",
    "Stop",
    "Reset",
    "Display Time",
    "Set Display Interval",
    "Record Lap",
    "Display Laps",
    "Help",
    "Exit",
)

HELP_LINES = (
    "Start and stop timing.",
    "Pause and resume timing.",
    "Record lap times.",
    "View recorded lap times.",
    "Change the display update interval.",
    "Reset the stopwatch.",
)


class StopwatchDisplay:
    """Prints frames, laps, menu and help to a Rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def frame_text(self, frame: RenderedFrame) -> Text:
        color = STATUS_COLORS.get(frame.status, "white")
        text = Text()
        text.append("Elapsed time: ")
        text.append(frame.time_text, style=f"bold {color}")
        text.append(f" ({frame.status_label})", style=color)
        text.append("\n")
        text.append(frame.bar_text, style="dim")
        return text

    def show_frame(self, frame: RenderedFrame) -> None:
        self.console.print(self.frame_text(frame))

    def show_result(self, result: OperationResult) -> None:
        """Print an operation outcome, with its frame when it carries one."""
        if result.frame is not None:
            # Pause and stop report the final time followed by what happened.
            text = Text()
            text.append(f"Elapsed time: {result.frame.time_text}")
            text.append(f" ({result.message})", style="bold")
            self.console.print(text)
            return

        style = "green" if result.ok else "yellow"
        if result.error == "config_error":
            style = "red"
        self.console.print(Text(result.message, style=style))

    def show_laps(self, laps: tuple[Lap, ...]) -> None:
        if not laps:
            self.console.print(Text("No laps recorded.", style="yellow"))
            return

        table = Table(title="Recorded Laps", show_header=True)
        table.add_column("Lap", justify="right", style="cyan")
        table.add_column("Time", justify="right")
        table.add_column("Split", justify="right", style="dim")

        previous = 0.0
        for lap in laps:
            table.add_row(
                str(lap.index),
                format_elapsed(lap.elapsed),
                format_elapsed(lap.elapsed - previous),
            )
            previous = lap.elapsed
        self.console.print(table)

    def show_menu(self) -> None:
        lines = [Text("Stopwatch Menu:", style="bold")]
        for number, label in enumerate(MENU_ITEMS, start=1):
            lines.append(Text(f"{number}. {label}"))
        self.console.print()
        self.console.print(Group(*lines))

    def show_help(self) -> None:
        body = "\n".join(
            f"{number}. {line}" for number, line in enumerate(HELP_LINES, start=1)
        )
        self.console.print(
            Panel(
                f"This stopwatch allows you to:\n\n{body}\n\n"
                "Type the number corresponding to each option to use the stopwatch.",
                title="Help",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def show_welcome(self) -> None:
        self.console.print(Text("Welcome to the Stopwatch!", style="bold green"))
        self.console.print("Type 9 for help on how to use the stopwatch.")
