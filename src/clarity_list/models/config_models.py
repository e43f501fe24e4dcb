"""Configuration models for Clarity List."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

STORAGE_KEY = "clarity-list-tasks"


class StorageConfig(BaseModel):
    """Persisted slot configuration."""

    path: str | None = Field(
        default=None, description="Slot document path (defaults to the user data dir)"
    )
    key: str = Field(default=STORAGE_KEY, description="Slot key holding the task list")


class EstimationConfig(BaseModel):
    """Estimation service configuration."""

    enabled: bool = Field(default=True)
    backend: Literal["auto", "llm", "offline"] = Field(default="auto")
    model: str = Field(default="gpt-4o-mini")
    base_url: str | None = Field(default=None)
    api_key_env: str = Field(default="OPENAI_API_KEY")
    timeout_seconds: float = Field(default=30.0, gt=0)


class ScheduleConfig(BaseModel):
    """Overload check configuration."""

    daily_capacity_minutes: int = Field(default=480, gt=0)
    default_task_minutes: int = Field(default=60, gt=0)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="DEBUG")


class AppConfig(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    estimation: EstimationConfig = Field(default_factory=EstimationConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
