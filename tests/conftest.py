"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and from
any model-service credentials in the environment.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from unittest.mock import patch

import pytest

from clarity_list.models import Task
from clarity_list.repositories import TaskStore

# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point every platformdirs lookup at *tmp_path* and clear cached services."""
    from clarity_list.services.config_service import get_config_service

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with (
        patch("clarity_list.services.config_service.user_config_dir", return_value=tmpdir),
        patch("clarity_list.services.config_service.user_data_dir", return_value=tmpdir),
        patch("clarity_list.repositories.task_store.user_data_dir", return_value=tmpdir),
        patch("clarity_list.utils.logger.user_log_dir", return_value=tmpdir),
    ):
        yield tmp_path
    get_config_service.cache_clear()


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by the temporary directory."""
    from clarity_list.services.config_service import ConfigService

    return ConfigService()


@pytest.fixture()
def storage_path(tmp_path):
    return tmp_path / "storage.json"


@pytest.fixture()
def store(storage_path):
    """An empty TaskStore writing to a temporary slot document."""
    task_store = TaskStore(storage_path)
    task_store.load()
    return task_store


# ---------------------------------------------------------------------------
# Task factory
# ---------------------------------------------------------------------------

_BASE_CREATED = datetime(2024, 5, 1, 9, 0, tzinfo=UTC)


def make_task(
    task_id: str = "task-0001",
    description: str = "Write report",
    *,
    completed: bool = False,
    created_at: datetime = _BASE_CREATED,
    due_date: date | None = None,
    due_time: time | None = None,
    estimated_time: float | None = None,
    completion_time_minutes: int | None = None,
) -> Task:
    """Build a Task with sensible defaults for tests."""
    completed_at = None
    if completed:
        completed_at = created_at
        if completion_time_minutes is None:
            completion_time_minutes = 30
    return Task(
        id=task_id,
        description=description,
        completed=completed,
        created_at=created_at,
        due_date=due_date,
        due_time=due_time,
        estimated_time=estimated_time,
        completed_at=completed_at,
        completion_time_minutes=completion_time_minutes if completed else None,
    )


@pytest.fixture()
def task_factory():
    return make_task
