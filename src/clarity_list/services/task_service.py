"""Task service - the state container behind every command.

This service owns one task store and one (optional) estimation client. It is
the only writer of the store: each mutation goes through the lifecycle
functions and is persisted immediately. Adding a task runs the two
best-effort estimation calls after the task has been saved; their failures
become notices and never undo the task.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, time
from typing import Literal

from clarity_list.models import (
    EstimationUnavailable,
    SubmissionInProgressError,
    Task,
)
from clarity_list.repositories import TaskStore
from clarity_list.services import lifecycle
from clarity_list.services.estimation import (
    EstimateCompletionTimeInput,
    EstimateCompletionTimeOutput,
    EstimationClient,
    ScheduledTask,
    WarnOverloadedScheduleInput,
    WarnOverloadedScheduleOutput,
    build_estimation_client,
)

logger = logging.getLogger(__name__)

TaskStatus = Literal["all", "active", "completed"]


@dataclass(frozen=True)
class Notice:
    """A transient, non-blocking message for the user."""

    level: Literal["info", "warning", "error"]
    title: str
    message: str


@dataclass
class AddTaskResult:
    """Outcome of adding a task, including any estimation results."""

    task: Task
    estimate: EstimateCompletionTimeOutput | None = None
    overload: WarnOverloadedScheduleOutput | None = None
    notices: list[Notice] = field(default_factory=list)
    saved: bool = True


class TaskService:
    """Service for task business logic.

    Args:
        store: TaskStore holding the persisted collection
        estimator: EstimationClient for enrichment, or None to skip it
    """

    def __init__(self, store: TaskStore, estimator: EstimationClient | None = None):
        self.store = store
        self.estimator = estimator
        self._submitting = False
        self.store.load()

    @property
    def is_submitting(self) -> bool:
        """True while an add is waiting on the estimation service."""
        return self._submitting

    def list_tasks(self, status: TaskStatus = "all") -> list[Task]:
        """List tasks in display order.

        Args:
            status: "active" (pending only), "completed", or "all"
        """
        tasks = self.store.tasks
        if status == "active":
            tasks = [t for t in tasks if not t.completed]
        elif status == "completed":
            tasks = [t for t in tasks if t.completed]
        return lifecycle.sort_tasks(tasks)

    def get_task(self, ref: str) -> Task:
        """Get a task by full ID or unique ID suffix."""
        return lifecycle.find_task(self.store.tasks, ref)

    def _commit(self, tasks: list[Task]) -> bool:
        saved = self.store.replace(tasks)
        if not saved:
            logger.warning("Task list kept in memory only; persisted slot not writable")
        return saved

    async def add_task(
        self,
        description: str,
        due_date: date | None = None,
        due_time: time | None = None,
    ) -> AddTaskResult:
        """Create a task, persist it, then enrich it with estimates.

        Raises:
            TaskValidationError: If the input is rejected (nothing is created)
            SubmissionInProgressError: If another add is still in flight
        """
        if self._submitting:
            raise SubmissionInProgressError("A task is already being added. Please wait.")

        task = lifecycle.create_task(description, due_date, due_time)
        history = self.store.tasks

        self._submitting = True
        try:
            saved = self._commit([*history, task])
            logger.info("task added: %s due=%s", task.id, task.due_date)
            result = AddTaskResult(task=task, saved=saved)

            if self.estimator is None:
                return result

            await self._attach_estimate(result, history)
            if task.due_date is not None:
                await self._check_overload(result, task.due_date, history)
            return result
        finally:
            self._submitting = False

    async def _attach_estimate(self, result: AddTaskResult, history: list[Task]) -> None:
        payload = EstimateCompletionTimeInput(
            task_description=result.task.description,
            past_tasks=lifecycle.past_tasks(history),
        )
        try:
            estimate = await self.estimator.estimate_completion_time(payload)
        except EstimationUnavailable as e:
            logger.warning("estimate skipped for %s: %s", result.task.id, e)
            result.notices.append(
                Notice(
                    "error",
                    "Estimation unavailable",
                    "Could not get an estimated completion time. Task added without one.",
                )
            )
            return

        result.estimate = estimate
        minutes = estimate.estimated_completion_time_minutes
        current = self.store.tasks
        if not any(t.id == result.task.id for t in current):
            # Removed while the estimate was in flight
            logger.info("discarding estimate for removed task %s", result.task.id)
            return

        enriched = result.task.model_copy(update={"estimated_time": minutes})
        # result.saved reports the add itself; a failed update only logs
        self._commit(lifecycle.replace_task(current, enriched))
        result.task = enriched
        result.notices.append(
            Notice("info", "Task added", f"Estimated time: {minutes:g} minutes.")
        )

    async def _check_overload(
        self, result: AddTaskResult, day: date, history: list[Task]
    ) -> None:
        due_that_day = lifecycle.tasks_due_on(self.store.tasks, day)
        if not due_that_day:
            return
        payload = WarnOverloadedScheduleInput(
            tasks=[
                ScheduledTask(description=t.description, due_date=t.due_date)
                for t in due_that_day
            ],
            historical_completion_times=lifecycle.historical_completion_times(history),
        )
        try:
            overload = await self.estimator.warn_overloaded_schedule(payload)
        except EstimationUnavailable as e:
            logger.warning("overload check skipped for %s: %s", day, e)
            result.notices.append(
                Notice(
                    "error",
                    "Schedule check unavailable",
                    f"Could not check the schedule for {day.isoformat()}.",
                )
            )
            return

        result.overload = overload
        if overload.is_overloaded:
            logger.info(
                "schedule overloaded on %s: %.0f minutes", day, overload.estimated_completion_time
            )
            result.notices.append(
                Notice("warning", "Schedule alert", overload.warning_message)
            )

    async def close(self) -> None:
        if self.estimator is not None:
            await self.estimator.aclose()

    def toggle_task(self, ref: str) -> Task:
        """Mark a pending task completed, or reopen a completed one."""
        tasks = self.store.tasks
        toggled = lifecycle.toggle_task(lifecycle.find_task(tasks, ref))
        self._commit(lifecycle.replace_task(tasks, toggled))
        logger.info("task toggled: %s completed=%s", toggled.id, toggled.completed)
        return toggled

    def edit_task(
        self,
        ref: str,
        *,
        description: str | None = None,
        due_date: date | None = None,
        due_time: time | None = None,
        clear_due: bool = False,
    ) -> Task:
        """Replace a task's description and/or due date."""
        tasks = self.store.tasks
        edited = lifecycle.edit_task(
            lifecycle.find_task(tasks, ref),
            description=description,
            due_date=due_date,
            due_time=due_time,
            clear_due=clear_due,
        )
        self._commit(lifecycle.replace_task(tasks, edited))
        logger.info("task edited: %s", edited.id)
        return edited

    def delete_task(self, ref: str) -> Task:
        """Permanently remove a task. Returns the removed task."""
        tasks = self.store.tasks
        task = lifecycle.find_task(tasks, ref)
        self._commit(lifecycle.delete_task(tasks, task.id))
        logger.info("task deleted: %s", task.id)
        return task


def get_task_service() -> TaskService:
    """Build a task service from the current configuration."""
    from clarity_list.services.config_service import get_config_service

    config_service = get_config_service()
    config = config_service.config
    store = TaskStore(config_service.storage_path, key=config.storage.key)
    return TaskService(store, build_estimation_client(config))


__all__ = [
    "AddTaskResult",
    "Notice",
    "TaskService",
    "get_task_service",
]
