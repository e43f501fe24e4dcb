"""Command 'add' of clarity"""

from typing import Annotated

import typer

from clarity_list.services.task_service import get_task_service
from clarity_list.utils.dates import parse_due_date, parse_due_time
from clarity_list.utils.ui.console import get_console
from clarity_list.utils.ui.formatters import (
    format_minutes,
    format_notice,
    format_output,
    format_success,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
async def add(
    description: Annotated[str, typer.Argument(help="What needs to be done")],
    due: Annotated[
        str | None,
        typer.Option("--due", "-d", help="Due date (YYYY-MM-DD, today, tomorrow)"),
    ] = None,
    at: Annotated[
        str | None, typer.Option("--time", "-t", help="Due time (HH:MM), needs --due")
    ] = None,
    no_estimate: Annotated[
        bool, typer.Option("--no-estimate", help="Skip time estimation")
    ] = False,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json)")
    ] = "pretty",
) -> None:
    """
    Add a task.

    The task is saved first, then an estimated completion time is requested.
    When the task has a due date, the day's schedule is checked for overload.

    Examples:
      clarity add "Write report"
      clarity add "Prepare slides" --due tomorrow --time 14:00
    """
    due_date = parse_due_date(due)
    due_time = parse_due_time(at)

    task_service = get_task_service()
    if no_estimate:
        task_service.estimator = None

    try:
        result = await task_service.add_task(description, due_date, due_time)
    finally:
        await task_service.close()

    if output == "json":
        format_output(
            {
                "task": result.task.to_storage(),
                "estimate": result.estimate.to_wire() if result.estimate else None,
                "overload": result.overload.to_wire() if result.overload else None,
                "notices": [
                    {"level": n.level, "title": n.title, "message": n.message}
                    for n in result.notices
                ],
            },
            "json",
        )
        return

    format_success(f"Task added: {result.task.description}")
    if result.task.estimated_time is not None:
        console.print(
            f"[dim]Estimated: ~{format_minutes(result.task.estimated_time)}[/dim]"
        )
    for notice in result.notices:
        format_notice(notice)
    if not result.saved:
        format_warning("Could not save to storage. The task is not persisted.")
    console.print(f"[dim]ID: {result.task.id}[/dim]")
