"""Main entry point for Stopwatch CLI."""

from pathlib import Path
from typing import Optional

import typer

from stopwatch_cli import __version__
from stopwatch_cli.commands import config
from stopwatch_cli.commands.decorators import AppError, command_wrapper
from stopwatch_cli.commands.shell import StopwatchShell
from stopwatch_cli.models.stopwatch import (
    MAX_INTERVAL,
    MIN_INTERVAL,
    Stopwatch,
    StopwatchDisplay,
)
from stopwatch_cli.models.stopwatch.state import is_valid_interval
from stopwatch_cli.utils.exit_codes import ERROR_INVALID_ARGS
from stopwatch_cli.utils.ui.console import get_console
from stopwatch_cli.utils.ui.formatters import format_warning

app = typer.Typer(
    name="stopwatch",
    help="An interactive terminal stopwatch with laps",
)

app.add_typer(config.app, name="config", help="Configuration management")


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context) -> None:
    """Start the interactive stopwatch when no command is given."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(run, config_dir=None, interval=None)


@app.command()
@command_wrapper
def run(
    config_dir: Optional[Path] = typer.Option(
        None, "--config-dir", help="Directory holding config.json"
    ),
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", help="Display interval in seconds, saved on exit"
    ),
) -> None:
    """Run the interactive stopwatch menu."""
    if interval is not None and not is_valid_interval(interval):
        raise AppError(
            f"Invalid interval. Please enter a number between "
            f"{MIN_INTERVAL:g} and {MAX_INTERVAL:g} seconds.",
            exit_code=ERROR_INVALID_ARGS,
        )

    display = StopwatchDisplay(get_console())
    stopwatch = Stopwatch(
        config_store=config.resolve_config_service(config_dir),
        on_render=display.show_frame,
    )
    if stopwatch.config_warning:
        format_warning(stopwatch.config_warning)
    if interval is not None:
        stopwatch.set_display_interval(interval)

    try:
        code = StopwatchShell(stopwatch, display).run()
    finally:
        closed = stopwatch.close()
        if not closed.ok:
            format_warning(closed.message)
    raise typer.Exit(code)


@app.command()
def version() -> None:
    """Show version information."""
    get_console().print(f"[bold]Stopwatch CLI[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
