"""Command 'edit' of clarity"""

from typing import Annotated

import typer

from clarity_list.services.task_service import get_task_service
from clarity_list.utils.dates import parse_due_date, parse_due_time
from clarity_list.utils.ui.formatters import format_success, format_task_item

from .decorators import AppError, command_wrapper

app = typer.Typer()


@app.command("edit")
@command_wrapper
def edit_command(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    description: Annotated[
        str | None, typer.Option("--description", help="New description")
    ] = None,
    due: Annotated[
        str | None,
        typer.Option("--due", "-d", help="New due date (YYYY-MM-DD, today, tomorrow)"),
    ] = None,
    at: Annotated[str | None, typer.Option("--time", "-t", help="New due time (HH:MM)")] = None,
    clear_due: Annotated[
        bool, typer.Option("--clear-due", help="Remove the due date and time")
    ] = False,
) -> None:
    """Edit a task's description or due date."""
    if description is None and due is None and at is None and not clear_due:
        raise AppError("Nothing to change. Pass --description, --due, --time or --clear-due.")
    if clear_due and (due is not None or at is not None):
        raise AppError("--clear-due cannot be combined with --due or --time.")

    task = get_task_service().edit_task(
        task_id,
        description=description,
        due_date=parse_due_date(due),
        due_time=parse_due_time(at),
        clear_due=clear_due,
    )
    format_success("Task updated")
    format_task_item(task, indent="  ")
