"""Configuration management commands."""

from typing import Annotated

import typer

from pathly_cli.services.config_service import get_config_service
from pathly_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pathly_cli.utils.typer_helpers import SuggestingGroup
from pathly_cli.utils.ui.console import get_console
from pathly_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "pretty",
) -> None:
    """View current configuration."""
    config_service = get_config_service()
    settings = config_service.list_settings()
    settings["storage.vault"] = str(config_service.db_path)
    format_output(settings, output)


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., output.format)")],
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., output.format)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if key is None and not yes and not typer.confirm("Reset all settings to defaults?"):
        format_info("Cancelled")
        return
    try:
        get_config_service().reset_config(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' reset" if key else "Configuration reset to defaults")
