"""Command 'delete' of clarity"""

from typing import Annotated

import typer

from clarity_list.services.task_service import get_task_service
from clarity_list.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("delete")
@command_wrapper
def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation")
    ] = False,
) -> None:
    """Permanently delete a task."""
    task_service = get_task_service()
    task = task_service.get_task(task_id)

    if not force:
        confirm = typer.confirm(f"Delete task '{task.description}'?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    task_service.delete_task(task.id)
    format_success(f"Task deleted: {task.description}")
