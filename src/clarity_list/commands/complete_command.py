"""Command 'complete' of clarity"""

from typing import Annotated

import typer

from clarity_list.services.task_service import get_task_service
from clarity_list.utils.ui.console import get_console
from clarity_list.utils.ui.formatters import format_minutes, format_success

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("complete")
@command_wrapper
def complete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
) -> None:
    """Mark a task completed, or reopen it if it is already completed."""
    task = get_task_service().toggle_task(task_id)

    content = task.description
    if len(content) > 60:
        content = content[:57] + "..."

    if task.completed:
        took = format_minutes(task.completion_time_minutes)
        format_success(f"✓ Completed: {content} ({took})")
        console.print(f"[dim]To undo: clarity complete {task_id}[/dim]")
    else:
        format_success(f"Reopened: {content}")
