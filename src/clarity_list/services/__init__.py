"""Services module for Clarity List - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .task_service import AddTaskResult, Notice, TaskService, get_task_service

__all__ = [
    "AddTaskResult",
    "ConfigService",
    "Notice",
    "TaskService",
    "get_config_service",
    "get_task_service",
]
