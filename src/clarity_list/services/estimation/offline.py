"""Deterministic estimation backend used when no model service is configured."""

from __future__ import annotations

import re
from statistics import fmean

from .schemas import (
    EstimateCompletionTimeInput,
    EstimateCompletionTimeOutput,
    WarnOverloadedScheduleInput,
    WarnOverloadedScheduleOutput,
)

_WORD_RE = re.compile(r"[a-z0-9]+")
_MINUTES_PER_WORD = 15
_MIN_GUESS = 15
_MAX_GUESS = 120


def _words(text: str) -> set[str]:
    return {w for w in _WORD_RE.findall(text.lower()) if len(w) > 2}


class OfflineEstimationBackend:
    """Heuristic estimates computed locally.

    Behavior:
    - completion time: similarity-weighted mean of past tasks sharing words
      with the new description, else the plain mean of all past tasks, else
      a guess from the description length
    - overload: N tasks x mean historical minutes (or the default per-task
      minutes when there is no history)
    """

    name = "offline"

    def __init__(self, default_task_minutes: int = 60):
        self.default_task_minutes = default_task_minutes

    async def estimate_completion_time(
        self, payload: EstimateCompletionTimeInput
    ) -> EstimateCompletionTimeOutput:
        past = payload.past_tasks
        if not past:
            word_count = len(payload.task_description.split())
            minutes = min(_MAX_GUESS, max(_MIN_GUESS, _MINUTES_PER_WORD * word_count))
            return EstimateCompletionTimeOutput(
                estimated_completion_time_minutes=minutes,
                reasoning=f"No history yet; guessed from a {word_count}-word description.",
            )

        target = _words(payload.task_description)
        weighted: list[tuple[float, float]] = []
        for p in past:
            other = _words(p.description)
            union = target | other
            score = len(target & other) / len(union) if union else 0.0
            if score > 0:
                weighted.append((score, p.completion_time_minutes))

        if weighted:
            total_weight = sum(w for w, _ in weighted)
            minutes = sum(w * m for w, m in weighted) / total_weight
            reasoning = f"Weighted by {len(weighted)} similar completed task(s)."
        else:
            minutes = fmean(p.completion_time_minutes for p in past)
            reasoning = f"Average of {len(past)} completed task(s); none looked similar."

        return EstimateCompletionTimeOutput(
            estimated_completion_time_minutes=round(minutes),
            reasoning=reasoning,
        )

    async def warn_overloaded_schedule(
        self, payload: WarnOverloadedScheduleInput
    ) -> WarnOverloadedScheduleOutput:
        history = payload.historical_completion_times
        per_task = fmean(history) if history else self.default_task_minutes
        total = round(per_task * len(payload.tasks))
        # The client applies the capacity rule and writes the warning text.
        return WarnOverloadedScheduleOutput(
            is_overloaded=False, estimated_completion_time=total
        )
