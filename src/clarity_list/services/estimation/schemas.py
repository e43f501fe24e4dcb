"""Request and response schemas for the estimation service.

Field names travel in camelCase on the wire; Python code uses snake_case.
Responses from any backend are validated against these models before they
reach the rest of the application.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class PastTask(_Schema):
    """A completed task and how long it took."""

    description: str
    completion_time_minutes: float = Field(ge=0)


class EstimateCompletionTimeInput(_Schema):
    task_description: str
    past_tasks: list[PastTask] = Field(default_factory=list)


class EstimateCompletionTimeOutput(_Schema):
    estimated_completion_time_minutes: float = Field(ge=0, allow_inf_nan=False)
    reasoning: str = ""


class ScheduledTask(_Schema):
    """A task placed on a specific day."""

    description: str
    due_date: date


class WarnOverloadedScheduleInput(_Schema):
    tasks: list[ScheduledTask] = Field(default_factory=list)
    historical_completion_times: list[float] = Field(default_factory=list)


class WarnOverloadedScheduleOutput(_Schema):
    is_overloaded: bool
    estimated_completion_time: float = Field(ge=0, allow_inf_nan=False)
    warning_message: str = ""

    @model_validator(mode="after")
    def _no_message_unless_overloaded(self) -> WarnOverloadedScheduleOutput:
        if not self.is_overloaded:
            self.warning_message = ""
        return self

    @classmethod
    def empty(cls) -> WarnOverloadedScheduleOutput:
        """Fixed response for an empty task list."""
        return cls(is_overloaded=False, estimated_completion_time=0, warning_message="")
