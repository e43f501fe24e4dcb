"""Command 'list' of clarity"""

from typing import Annotated

import typer

from clarity_list.services.config_service import get_config_service
from clarity_list.services.task_service import get_task_service
from clarity_list.utils.ui.formatters import format_output

from .decorators import AppError, command_wrapper

app = typer.Typer()

_STATUSES = ("all", "active", "completed")


@app.command("list")
@command_wrapper
def list_tasks(
    status: Annotated[
        str, typer.Option("--status", "-s", help="Filter by status (all/active/completed)")
    ] = "all",
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (pretty/table/json/yaml)"),
    ] = None,
    json_opt: Annotated[
        bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
    ] = False,
) -> None:
    """List tasks: pending first, soonest due first, newest first."""
    if status not in _STATUSES:
        raise AppError(f"Invalid status '{status}'. Choose from: {', '.join(_STATUSES)}")
    if json_opt:
        output = "json"
    if output is None:
        output = get_config_service().config.output.format

    format_output(get_task_service().list_tasks(status), output)
