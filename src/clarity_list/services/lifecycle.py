"""Task lifecycle - pure transitions and derived schedule computations.

Nothing here performs I/O. Every transition returns a new ``Task``; the
caller decides what to persist. ``now`` is injectable so tests can pin time.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import UTC, date, datetime, time

from clarity_list.models import (
    AmbiguousTaskError,
    Task,
    TaskNotFoundError,
    TaskValidationError,
)
from clarity_list.services.estimation.schemas import PastTask

MIN_DESCRIPTION_LENGTH = 3


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so stored values stay comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def validate_task_input(
    description: str,
    due_date: date | None = None,
    due_time: time | None = None,
) -> str:
    """Validate task input at the create/edit boundary.

    Returns:
        The trimmed description

    Raises:
        TaskValidationError: If the description is too short or a time is
            given without a date
    """
    text = (description or "").strip()
    if len(text) < MIN_DESCRIPTION_LENGTH:
        raise TaskValidationError(
            f"Task description must be at least {MIN_DESCRIPTION_LENGTH} characters.",
            field="description",
        )
    if due_time is not None and due_date is None:
        raise TaskValidationError(
            "A date is required when a time is set.", field="due_date"
        )
    return text


def create_task(
    description: str,
    due_date: date | None = None,
    due_time: time | None = None,
    *,
    now: datetime | None = None,
) -> Task:
    """Create a new pending task with a fresh ID.

    Raises:
        TaskValidationError: If the input is invalid or the due date has
            already passed (local calendar day)
    """
    text = validate_task_input(description, due_date, due_time)
    created_at = now or _utcnow()
    if due_date is not None and due_date < created_at.astimezone().date():
        raise TaskValidationError("Due date cannot be in the past.", field="due_date")
    return Task(
        id=str(uuid.uuid4()),
        description=text,
        completed=False,
        created_at=created_at,
        due_date=due_date,
        due_time=due_time,
    )


def toggle_task(task: Task, *, now: datetime | None = None) -> Task:
    """Flip a task between Pending and Completed.

    Completing records ``completed_at`` and the whole minutes elapsed since
    creation; reopening clears both.
    """
    if task.completed:
        return task.model_copy(
            update={
                "completed": False,
                "completed_at": None,
                "completion_time_minutes": None,
            }
        )

    completed_at = now or _utcnow()
    elapsed = _as_utc(completed_at) - _as_utc(task.created_at)
    minutes = max(0, round(elapsed.total_seconds() / 60))
    return task.model_copy(
        update={
            "completed": True,
            "completed_at": completed_at,
            "completion_time_minutes": minutes,
        }
    )


def edit_task(
    task: Task,
    *,
    description: str | None = None,
    due_date: date | None = None,
    due_time: time | None = None,
    clear_due: bool = False,
) -> Task:
    """Replace description and/or due date in place.

    A new ``due_date`` replaces date and time together. A ``due_time`` on its
    own keeps the task's existing date. ``clear_due`` drops both.
    Completion state and timestamps are never touched.
    """
    if clear_due:
        new_date, new_time = None, None
    elif due_date is not None:
        new_date, new_time = due_date, due_time
    elif due_time is not None:
        new_date, new_time = task.due_date, due_time
    else:
        new_date, new_time = task.due_date, task.due_time

    text = validate_task_input(
        task.description if description is None else description, new_date, new_time
    )
    return task.model_copy(
        update={"description": text, "due_date": new_date, "due_time": new_time}
    )


def delete_task(tasks: Iterable[Task], task_id: str) -> list[Task]:
    """Return the collection without the given task.

    Raises:
        TaskNotFoundError: If no task has this ID
    """
    tasks = list(tasks)
    remaining = [t for t in tasks if t.id != task_id]
    if len(remaining) == len(tasks):
        raise TaskNotFoundError(f"No task found with ID '{task_id}'")
    return remaining


def replace_task(tasks: Iterable[Task], updated: Task) -> list[Task]:
    """Return the collection with the task of the same ID swapped in place."""
    result = []
    found = False
    for t in tasks:
        if t.id == updated.id:
            result.append(updated)
            found = True
        else:
            result.append(t)
    if not found:
        raise TaskNotFoundError(f"No task found with ID '{updated.id}'")
    return result


def _sort_key(task: Task) -> tuple:
    due_at = task.due_at
    return (
        task.completed,
        due_at is None,
        due_at or datetime.min,
        -_as_utc(task.created_at).timestamp(),
        task.id,
    )


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Display order: pending first, then by due date, then newest first.

    Within each completion group, dated tasks come before undated ones in
    ascending due order. Ties and undated tasks are ordered by most recently
    created. The ID breaks any remaining tie so the order is total.
    """
    return sorted(tasks, key=_sort_key)


def completed_with_duration(tasks: Iterable[Task]) -> list[Task]:
    """Completed tasks that carry a recorded completion time."""
    return [t for t in tasks if t.completed and t.completion_time_minutes is not None]


def past_tasks(tasks: Iterable[Task]) -> list[PastTask]:
    """History entries for completion time estimation."""
    return [
        PastTask(
            description=t.description,
            completion_time_minutes=t.completion_time_minutes,
        )
        for t in completed_with_duration(tasks)
    ]


def historical_completion_times(tasks: Iterable[Task]) -> list[int]:
    """Minute durations of every completed task with a recorded duration."""
    return [t.completion_time_minutes for t in completed_with_duration(tasks)]


def tasks_due_on(tasks: Iterable[Task], day: date) -> list[Task]:
    """Pending tasks due on the given calendar day."""
    return [t for t in tasks if not t.completed and t.due_date == day]


def find_task(tasks: Iterable[Task], ref: str) -> Task:
    """Resolve a full task ID or a unique ID suffix.

    Raises:
        TaskNotFoundError: If nothing matches
        AmbiguousTaskError: If the suffix matches several tasks
    """
    ref = (ref or "").strip()
    tasks = list(tasks)
    if not ref:
        raise TaskNotFoundError("Task ID is required")

    for task in tasks:
        if task.id == ref:
            return task

    matches = [t for t in tasks if t.id.endswith(ref)]
    if not matches:
        raise TaskNotFoundError(f"No task found with ID or suffix '{ref}'")
    if len(matches) > 1:
        raise AmbiguousTaskError(
            f"Multiple tasks match suffix '{ref}'. Please use a longer suffix.",
            candidates=[t.id for t in matches],
        )
    return matches[0]
