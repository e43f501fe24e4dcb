"""Clarity List domain models.

Pydantic models for tasks and configuration, plus the exception hierarchy
shared by every layer.
"""

from .config_models import (
    STORAGE_KEY,
    AppConfig,
    EstimationConfig,
    LoggingConfig,
    OutputConfig,
    ScheduleConfig,
    StorageConfig,
)
from .exceptions import (
    AmbiguousTaskError,
    ClarityListError,
    EstimationUnavailable,
    PersistenceError,
    SubmissionInProgressError,
    TaskNotFoundError,
    TaskValidationError,
)
from .task import Task

__all__ = [
    # Task models
    "Task",
    # Config models
    "AppConfig",
    "StorageConfig",
    "EstimationConfig",
    "ScheduleConfig",
    "OutputConfig",
    "LoggingConfig",
    "STORAGE_KEY",
    # Exceptions
    "ClarityListError",
    "TaskValidationError",
    "TaskNotFoundError",
    "AmbiguousTaskError",
    "SubmissionInProgressError",
    "PersistenceError",
    "EstimationUnavailable",
]
