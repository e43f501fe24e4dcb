"""Estimation service - completion time estimates and overload checks."""

from __future__ import annotations

import logging
import os

from clarity_list.models import AppConfig

from .client import EstimationBackend, EstimationClient, default_warning
from .llm_backend import LLMEstimationBackend
from .offline import OfflineEstimationBackend
from .schemas import (
    EstimateCompletionTimeInput,
    EstimateCompletionTimeOutput,
    PastTask,
    ScheduledTask,
    WarnOverloadedScheduleInput,
    WarnOverloadedScheduleOutput,
)

logger = logging.getLogger(__name__)


def build_estimation_client(config: AppConfig) -> EstimationClient | None:
    """Build the estimation client described by the configuration.

    Returns None when estimation is disabled. With ``backend="auto"`` the
    model backend is used only if its API key variable is set; otherwise the
    offline backend answers.
    """
    est = config.estimation
    schedule = config.schedule
    if not est.enabled:
        return None

    api_key = os.environ.get(est.api_key_env, "").strip()
    use_llm = est.backend == "llm" or (est.backend == "auto" and bool(api_key))

    backend: EstimationBackend
    if use_llm:
        if not api_key:
            logger.warning(
                "Estimation backend 'llm' selected but %s is not set; using offline",
                est.api_key_env,
            )
            backend = OfflineEstimationBackend(schedule.default_task_minutes)
        else:
            backend = LLMEstimationBackend(
                api_key=api_key,
                model=est.model,
                base_url=est.base_url,
                timeout_seconds=est.timeout_seconds,
                capacity_minutes=schedule.daily_capacity_minutes,
                default_task_minutes=schedule.default_task_minutes,
            )
    else:
        backend = OfflineEstimationBackend(schedule.default_task_minutes)

    logger.debug("Estimation backend: %s", backend.name)
    return EstimationClient(
        backend,
        capacity_minutes=schedule.daily_capacity_minutes,
        default_task_minutes=schedule.default_task_minutes,
        timeout_seconds=est.timeout_seconds,
    )


__all__ = [
    "EstimationBackend",
    "EstimationClient",
    "LLMEstimationBackend",
    "OfflineEstimationBackend",
    "build_estimation_client",
    "default_warning",
    "PastTask",
    "ScheduledTask",
    "EstimateCompletionTimeInput",
    "EstimateCompletionTimeOutput",
    "WarnOverloadedScheduleInput",
    "WarnOverloadedScheduleOutput",
]
