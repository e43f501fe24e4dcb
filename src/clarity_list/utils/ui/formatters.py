"""Output formatters for tasks, notices and plain data."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING, Any

import yaml
from rich.table import Table
from rich.text import Text

from clarity_list.models import Task

from .console import get_console

if TYPE_CHECKING:
    from clarity_list.services.task_service import Notice

console = get_console()

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}

NOTICE_STYLES = {
    "info": ("bold blue", "ℹ"),
    "warning": ("bold yellow", "⚠"),
    "error": ("bold red", "✗"),
}


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def format_notice(notice: Notice) -> None:
    """Display a transient notice produced by the task service."""
    style, icon = NOTICE_STYLES.get(notice.level, NOTICE_STYLES["info"])
    line = Text()
    line.append(f"{icon} {notice.title}: ", style=style)
    line.append(notice.message)
    console.print(line)


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """Minimum suffix length that identifies each ID among the others."""
    result = {}
    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            if not any(tid != task_id and tid.endswith(suffix) for tid in task_ids):
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)
    return result


def format_minutes(minutes: float | None) -> str:
    """Render a duration such as ``45m`` or ``1h 30m``."""
    if minutes is None:
        return ""
    total = int(round(minutes))
    hours, mins = divmod(total, 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


def format_due(task: Task) -> str:
    """Format a task's due date, e.g. ``Jun 01, 2024`` or ``Jun 01, 2024 14:30``."""
    if task.due_date is None:
        return ""
    text = task.due_date.strftime("%b %d, %Y")
    if task.due_time is not None:
        text += f" {task.due_time.strftime('%H:%M')}"
    return text


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """Check if a pending task's due date/time has passed (local time)."""
    if task.completed or task.due_at is None:
        return False
    now = now or datetime.now()
    if task.due_time is None:
        return task.due_date < now.date()
    return task.due_at < now


def task_to_dict(task: Task) -> dict:
    """Plain dict for JSON/YAML output (camelCase keys as persisted)."""
    return task.to_storage()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format.

    Lists of tasks render as a task view in ``pretty``/``table`` mode and as
    their persisted JSON shape otherwise.
    """
    is_task_list = isinstance(data, list) and all(isinstance(t, Task) for t in data)
    if is_task_list and output_format in ("json", "yaml"):
        data = [task_to_dict(t) for t in data]
    elif isinstance(data, Task):
        data = task_to_dict(data)

    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "table":
        if is_task_list:
            format_tasks_table(data)
        elif isinstance(data, dict):
            format_dict_table(data)
        else:
            console.print(data)
    elif is_task_list:
        format_tasks_pretty(data)
    else:
        console.print(data)


def _flatten(data: dict, prefix: str = "") -> dict:
    flat = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{name}."))
        else:
            flat[name] = value
    return flat


def format_dict_table(data: dict) -> None:
    """Key/value table; nested sections are shown as dot-separated keys."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in _flatten(data).items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


def format_tasks_table(tasks: list[Task]) -> None:
    """Format tasks as a Rich table."""
    if not tasks:
        console.print("[yellow]No tasks yet. Add one with 'clarity add'.[/yellow]")
        return

    suffix_map = calculate_unique_suffixes([t.id for t in tasks])
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("", width=2)
    table.add_column("Task")
    table.add_column("Due")
    table.add_column("Estimate", justify="right")
    table.add_column("Took", justify="right")

    for task in tasks:
        due_style = "bold red" if is_overdue(task) else "cyan"
        table.add_row(
            task.id[-suffix_map[task.id] :],
            STATUS_ICONS["completed" if task.completed else "open"],
            Text(task.description, style="dim" if task.completed else ""),
            Text(format_due(task), style=due_style),
            format_minutes(task.estimated_time),
            format_minutes(task.completion_time_minutes),
        )
    console.print(table)


def format_tasks_pretty(tasks: list[Task]) -> None:
    """Format tasks in pretty format with a summary header."""
    active = [t for t in tasks if not t.completed]
    done = [t for t in tasks if t.completed]

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(active)} active", style="dim")
    if done:
        header.append(f", {len(done)} completed", style="dim green")
    header.append(")", style="dim")
    console.print(header)
    console.print()

    if not tasks:
        console.print("[yellow]No tasks yet. Add one with 'clarity add'.[/yellow]")
        return

    suffix_map = calculate_unique_suffixes([t.id for t in tasks])
    for task in tasks:
        format_task_item(task, indent="  ", suffix_map=suffix_map)


def format_task_item(
    task: Task,
    indent: str = "",
    suffix_map: dict[str, int] | None = None,
) -> None:
    """Format a single task: status line plus a metadata line."""
    status_icon = STATUS_ICONS["completed" if task.completed else "open"]
    line = Text(f"{indent}{status_icon} ")
    line.append(task.description, style="dim" if task.completed else "")
    console.print(line)

    meta: list[tuple[str, str]] = []
    if task.due_date is not None:
        style = "bold red" if is_overdue(task) else "cyan"
        meta.append((f"📅 {format_due(task)}", style))
    if task.estimated_time is not None:
        meta.append((f"⏱ ~{format_minutes(task.estimated_time)}", "magenta"))
    if task.completed and task.completion_time_minutes is not None:
        meta.append((f"done in {format_minutes(task.completion_time_minutes)}", "dim green"))

    length = (suffix_map or {}).get(task.id, 6)
    meta.append((f"#{task.id[-length:]}", "dim"))

    meta_line = Text()
    meta_line.append(f"{indent}   └─ ", style="dim")
    for i, (text, style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=style)
    console.print(meta_line)
