"""Configuration management commands."""

from typing import Annotated

import typer

from clarity_list.services.config_service import get_config_service
from clarity_list.utils.ui.console import get_console
from clarity_list.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
)

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console(highlight=False)


def _parse_value(value: str):
    """Convert a CLI string to bool/int/float/None where it looks like one."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("null", "none"):
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


@app.command("view")
@command_wrapper
def view_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "table",
) -> None:
    """View current configuration."""
    config_service = get_config_service()
    format_output(config_service.config.model_dump(mode="json"), output)
    if output not in ("json", "yaml"):
        console.print(f"[dim]{config_service.config_path}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., schedule.daily_capacity_minutes)")],
) -> None:
    """Get a configuration value."""
    config_service = get_config_service()
    if not config_service.has_key(key):
        raise AppError(f"Configuration key '{key}' not found")
    value = config_service.get(key)
    console.print("null" if value is None else str(value))


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., estimation.backend)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    config_service = get_config_service()
    parsed_value = _parse_value(value)
    try:
        config_service.set(key, parsed_value)
    except KeyError as e:
        raise AppError(e.args[0]) from e
    except ValueError as e:
        if parsed_value == value:
            raise AppError(str(e)) from e
        # Looked numeric or boolean but the field wants text
        try:
            config_service.set(key, value)
        except ValueError:
            raise AppError(str(e)) from e
        parsed_value = value
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        confirm = typer.confirm(f"Are you sure you want to reset {msg}?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    config_service = get_config_service()
    try:
        config_service.reset(key)
    except KeyError as e:
        raise AppError(e.args[0]) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
