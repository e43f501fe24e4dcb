"""Estimation client - best-effort enrichment for new tasks.

The client wraps one backend and guarantees the response contracts no matter
which backend answered:

- every failure (SDK error, timeout, malformed response, unexpected error)
  surfaces as ``EstimationUnavailable``
- an overload check with no tasks never reaches the backend
- the overload decision follows one explicit rule: the estimated total is
  compared against the configured daily capacity, and without history each
  task counts as the default task duration whatever the backend reported
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Protocol

from clarity_list.models import EstimationUnavailable

from .schemas import (
    EstimateCompletionTimeInput,
    EstimateCompletionTimeOutput,
    WarnOverloadedScheduleInput,
    WarnOverloadedScheduleOutput,
)

logger = logging.getLogger(__name__)


class EstimationBackend(Protocol):
    """Anything that can answer the two estimation requests."""

    name: str

    async def estimate_completion_time(
        self, payload: EstimateCompletionTimeInput
    ) -> EstimateCompletionTimeOutput: ...

    async def warn_overloaded_schedule(
        self, payload: WarnOverloadedScheduleInput
    ) -> WarnOverloadedScheduleOutput: ...


def default_warning(total_minutes: float, capacity_minutes: int) -> str:
    return (
        "You may be overcommitting yourself on this day. The estimated "
        f"completion time for all tasks is {total_minutes:g} minutes, more than "
        f"the {capacity_minutes} minutes you usually have."
    )


class EstimationClient:
    """Facade over an estimation backend."""

    def __init__(
        self,
        backend: EstimationBackend,
        *,
        capacity_minutes: int = 480,
        default_task_minutes: int = 60,
        timeout_seconds: float | None = 30.0,
    ):
        self.backend = backend
        self.capacity_minutes = capacity_minutes
        self.default_task_minutes = default_task_minutes
        self.timeout_seconds = timeout_seconds

    async def _call(self, operation: str, coro):
        start = time.monotonic()
        try:
            if self.timeout_seconds:
                result = await asyncio.wait_for(coro, timeout=self.timeout_seconds)
            else:
                result = await coro
        except EstimationUnavailable as e:
            logger.warning("%s via %s failed: %s", operation, self.backend.name, e)
            raise
        except TimeoutError as e:
            logger.warning(
                "%s via %s timed out after %.1fs",
                operation,
                self.backend.name,
                self.timeout_seconds,
            )
            raise EstimationUnavailable(f"{operation} timed out") from e
        except Exception as e:
            logger.exception("%s via %s raised unexpectedly", operation, self.backend.name)
            raise EstimationUnavailable(f"{operation} failed: {e}") from e

        logger.info(
            "%s via %s completed (%.2fs)",
            operation,
            self.backend.name,
            time.monotonic() - start,
        )
        return result

    async def estimate_completion_time(
        self, payload: EstimateCompletionTimeInput
    ) -> EstimateCompletionTimeOutput:
        """Estimate minutes for a new task from the user's completed tasks."""
        result = await self._call(
            "estimate_completion_time",
            self.backend.estimate_completion_time(payload),
        )
        if not isinstance(result, EstimateCompletionTimeOutput):
            raise EstimationUnavailable("Backend returned an unexpected estimate type")
        return result

    async def warn_overloaded_schedule(
        self, payload: WarnOverloadedScheduleInput
    ) -> WarnOverloadedScheduleOutput:
        """Check whether the given day's tasks exceed the daily capacity."""
        if not payload.tasks:
            return WarnOverloadedScheduleOutput.empty()

        result = await self._call(
            "warn_overloaded_schedule",
            self.backend.warn_overloaded_schedule(payload),
        )
        if not isinstance(result, WarnOverloadedScheduleOutput):
            raise EstimationUnavailable("Backend returned an unexpected schedule type")
        return self._apply_capacity(result, payload)

    def _apply_capacity(
        self,
        result: WarnOverloadedScheduleOutput,
        payload: WarnOverloadedScheduleInput,
    ) -> WarnOverloadedScheduleOutput:
        total = result.estimated_completion_time
        message = result.warning_message.strip()
        if not payload.historical_completion_times:
            # No history: every task counts as the default duration
            total = self.default_task_minutes * len(payload.tasks)
            message = ""
        overloaded = total > self.capacity_minutes
        if not overloaded:
            message = ""
        elif not message:
            message = default_warning(total, self.capacity_minutes)
        return WarnOverloadedScheduleOutput(
            is_overloaded=overloaded,
            estimated_completion_time=total,
            warning_message=message,
        )

    async def aclose(self) -> None:
        """Release the backend's network client, if it holds one."""
        close = getattr(self.backend, "close", None)
        if close is not None:
            await close()
