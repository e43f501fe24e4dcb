"""Task data models."""

from __future__ import annotations

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Task(BaseModel):
    """A single to-do item.

    Attributes:
        id: Unique identifier, assigned at creation
        description: What needs to be done (stored trimmed)
        completed: Completion status
        created_at: Creation timestamp, never changes
        due_date: Optional calendar day the task is due
        due_time: Optional time of day, only valid together with due_date
        estimated_time: Estimated minutes to complete, set from an estimation result
        completed_at: When the task was last marked complete
        completion_time_minutes: Minutes between creation and completion
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    description: str
    completed: bool = False
    created_at: datetime
    due_date: date | None = None
    due_time: time | None = None
    estimated_time: float | None = Field(default=None, ge=0)
    completed_at: datetime | None = None
    completion_time_minutes: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _time_requires_date(self) -> Task:
        if self.due_time is not None and self.due_date is None:
            raise ValueError("dueTime requires dueDate")
        return self

    @property
    def is_pending(self) -> bool:
        return not self.completed

    @property
    def due_at(self) -> datetime | None:
        """Due date combined with due time (midnight when no time is set)."""
        if self.due_date is None:
            return None
        return datetime.combine(self.due_date, self.due_time or time.min)

    def to_storage(self) -> dict:
        """Serialize to the persisted JSON shape (camelCase, unset fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
