"""Configuration management commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.prompt import Confirm

from stopwatch_cli.commands.decorators import AppError, command_wrapper
from stopwatch_cli.models.stopwatch import DEFAULT_INTERVAL, MAX_INTERVAL, MIN_INTERVAL
from stopwatch_cli.models.stopwatch.exceptions import ConfigError
from stopwatch_cli.models.stopwatch.state import is_valid_interval
from stopwatch_cli.services.config_service import ConfigService, get_config_service
from stopwatch_cli.utils.exit_codes import ERROR_CONFIG, ERROR_INVALID_ARGS
from stopwatch_cli.utils.ui.console import get_console
from stopwatch_cli.utils.ui.formatters import format_success, format_warning

app = typer.Typer(help="Configuration management commands")

CONFIG_DIR_OPTION = typer.Option(
    None, "--config-dir", help="Directory holding config.json"
)


def resolve_config_service(config_dir: Optional[Path]) -> ConfigService:
    """Use *config_dir* when given, the cached default service otherwise."""
    if config_dir is not None:
        return ConfigService(config_dir)
    return get_config_service()


@app.command("show")
@command_wrapper
def show_config(config_dir: Optional[Path] = CONFIG_DIR_OPTION) -> None:
    """Show the persisted display interval."""
    console = get_console()
    service = resolve_config_service(config_dir)
    try:
        interval = service.load_display_interval()
    except ConfigError as e:
        format_warning(f"{e}. Using default display interval.")
        interval = DEFAULT_INTERVAL

    console.print(f"Config file: [cyan]{service.config_path}[/cyan]")
    console.print(f"Display interval: [bold]{interval:g}[/bold] seconds")


@app.command("set-interval")
@command_wrapper
def set_interval(
    seconds: float = typer.Argument(..., help="Refresh cadence in seconds"),
    config_dir: Optional[Path] = CONFIG_DIR_OPTION,
) -> None:
    """Persist a new display interval."""
    if not is_valid_interval(seconds):
        raise AppError(
            f"Invalid interval. Please enter a number between "
            f"{MIN_INTERVAL:g} and {MAX_INTERVAL:g} seconds.",
            exit_code=ERROR_INVALID_ARGS,
        )

    service = resolve_config_service(config_dir)
    try:
        service.save_display_interval(seconds)
    except ConfigError as e:
        raise AppError(str(e), exit_code=ERROR_CONFIG) from e
    format_success(f"Display interval set to {seconds:g} seconds")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    config_dir: Optional[Path] = CONFIG_DIR_OPTION,
) -> None:
    """Forget the persisted display interval."""
    if not yes and not Confirm.ask(
        "Reset the display interval to its default?", console=get_console()
    ):
        get_console().print("[yellow]Cancelled[/yellow]")
        return

    service = resolve_config_service(config_dir)
    try:
        service.reset_config()
    except OSError as e:
        raise AppError(f"Failed to reset config: {e}", exit_code=ERROR_CONFIG) from e
    format_success("Configuration reset to defaults")
