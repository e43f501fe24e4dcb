"""Tests for the estimation client facade and backend selection."""

import asyncio
import math
from datetime import date
from unittest.mock import AsyncMock

import pytest

from clarity_list.models import AppConfig, EstimationUnavailable
from clarity_list.services.estimation import (
    EstimateCompletionTimeInput,
    EstimateCompletionTimeOutput,
    EstimationClient,
    LLMEstimationBackend,
    OfflineEstimationBackend,
    ScheduledTask,
    WarnOverloadedScheduleInput,
    WarnOverloadedScheduleOutput,
    build_estimation_client,
)

DAY = date(2024, 6, 1)


def _schedule(n: int, history=()) -> WarnOverloadedScheduleInput:
    return WarnOverloadedScheduleInput(
        tasks=[ScheduledTask(description=f"Task {i}", due_date=DAY) for i in range(n)],
        historical_completion_times=list(history),
    )


class FakeBackend:
    """Backend returning canned results and recording calls."""

    name = "fake"

    def __init__(self, estimate=None, overload=None, delay: float = 0.0):
        self.estimate = estimate
        self.overload = overload
        self.delay = delay
        self.calls: list[str] = []

    async def estimate_completion_time(self, payload):
        self.calls.append("estimate")
        await asyncio.sleep(self.delay)
        return self.estimate

    async def warn_overloaded_schedule(self, payload):
        self.calls.append("overload")
        await asyncio.sleep(self.delay)
        return self.overload


class TestWarnOverloadedSchedule:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("history", [[], [10, 20], [600]])
    async def test_empty_task_list_returns_fixed_result(self, history):
        backend = FakeBackend()
        client = EstimationClient(backend)

        result = await client.warn_overloaded_schedule(_schedule(0, history))

        assert result == WarnOverloadedScheduleOutput(
            is_overloaded=False, estimated_completion_time=0, warning_message=""
        )
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_two_default_tasks_are_not_overloaded(self):
        client = EstimationClient(OfflineEstimationBackend())

        result = await client.warn_overloaded_schedule(_schedule(2))

        assert result.estimated_completion_time == 120
        assert result.is_overloaded is False
        assert result.warning_message == ""

    @pytest.mark.asyncio
    async def test_nine_default_tasks_are_overloaded(self):
        client = EstimationClient(OfflineEstimationBackend())

        result = await client.warn_overloaded_schedule(_schedule(9))

        assert result.estimated_completion_time == 540
        assert result.is_overloaded is True
        assert "540" in result.warning_message

    @pytest.mark.asyncio
    async def test_capacity_is_configurable(self):
        client = EstimationClient(OfflineEstimationBackend(), capacity_minutes=100)
        result = await client.warn_overloaded_schedule(_schedule(2))
        assert result.is_overloaded is True

    @pytest.mark.asyncio
    async def test_backend_verdict_is_recomputed_from_total(self):
        backend = FakeBackend(
            overload=WarnOverloadedScheduleOutput(
                is_overloaded=True,
                estimated_completion_time=90,
                warning_message="Too much!",
            )
        )
        result = await EstimationClient(backend).warn_overloaded_schedule(_schedule(1, [90]))
        assert result.is_overloaded is False
        assert result.warning_message == ""

    @pytest.mark.asyncio
    async def test_backend_message_kept_when_overloaded(self):
        backend = FakeBackend(
            overload=WarnOverloadedScheduleOutput(
                is_overloaded=True,
                estimated_completion_time=600,
                warning_message="Slow down on Saturday.",
            )
        )
        result = await EstimationClient(backend).warn_overloaded_schedule(_schedule(3, [200]))
        assert result.warning_message == "Slow down on Saturday."

    @pytest.mark.asyncio
    async def test_missing_message_is_filled_in(self):
        backend = FakeBackend(
            overload=WarnOverloadedScheduleOutput(
                is_overloaded=False, estimated_completion_time=700
            )
        )
        result = await EstimationClient(backend).warn_overloaded_schedule(_schedule(3, [200]))
        assert result.is_overloaded is True
        assert result.warning_message

    @pytest.mark.asyncio
    async def test_history_mean_drives_offline_total(self):
        client = EstimationClient(OfflineEstimationBackend())
        result = await client.warn_overloaded_schedule(_schedule(3, [100, 200]))
        assert result.estimated_completion_time == 450
        assert result.is_overloaded is False

    @pytest.mark.asyncio
    async def test_empty_history_uses_default_minutes_per_task(self):
        backend = FakeBackend(
            overload=WarnOverloadedScheduleOutput(
                is_overloaded=True,
                estimated_completion_time=600,
                warning_message="Way too much for one day.",
            )
        )
        client = EstimationClient(backend)

        result = await client.warn_overloaded_schedule(_schedule(2))

        assert backend.calls == ["overload"]
        assert result.estimated_completion_time == 120
        assert result.is_overloaded is False
        assert result.warning_message == ""

    @pytest.mark.asyncio
    async def test_empty_history_overload_gets_default_warning(self):
        backend = FakeBackend(
            overload=WarnOverloadedScheduleOutput(
                is_overloaded=False, estimated_completion_time=30
            )
        )
        client = EstimationClient(backend, default_task_minutes=45, capacity_minutes=100)

        result = await client.warn_overloaded_schedule(_schedule(3))

        assert result.estimated_completion_time == 135
        assert result.is_overloaded is True
        assert "135" in result.warning_message


class TestEstimateCompletionTime:
    @pytest.mark.asyncio
    async def test_returns_backend_estimate(self):
        estimate = EstimateCompletionTimeOutput(estimated_completion_time_minutes=25)
        client = EstimationClient(FakeBackend(estimate=estimate))

        result = await client.estimate_completion_time(
            EstimateCompletionTimeInput(task_description="Write report")
        )

        assert result.estimated_completion_time_minutes == 25

    @pytest.mark.asyncio
    async def test_no_history_gives_finite_estimate(self):
        client = EstimationClient(OfflineEstimationBackend())
        result = await client.estimate_completion_time(
            EstimateCompletionTimeInput(task_description="Write report", past_tasks=[])
        )
        minutes = result.estimated_completion_time_minutes
        assert math.isfinite(minutes)
        assert minutes >= 0

    @pytest.mark.asyncio
    async def test_unexpected_result_type_is_unavailable(self):
        client = EstimationClient(FakeBackend(estimate={"minutes": 5}))
        with pytest.raises(EstimationUnavailable):
            await client.estimate_completion_time(
                EstimateCompletionTimeInput(task_description="Write report")
            )


class TestFailures:
    @pytest.mark.asyncio
    async def test_timeout_becomes_unavailable(self):
        backend = FakeBackend(
            estimate=EstimateCompletionTimeOutput(estimated_completion_time_minutes=5),
            delay=1.0,
        )
        client = EstimationClient(backend, timeout_seconds=0.01)
        with pytest.raises(EstimationUnavailable, match="timed out"):
            await client.estimate_completion_time(
                EstimateCompletionTimeInput(task_description="Write report")
            )

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_unavailable(self):
        backend = FakeBackend()
        backend.warn_overloaded_schedule = AsyncMock(side_effect=RuntimeError("boom"))
        client = EstimationClient(backend)
        with pytest.raises(EstimationUnavailable, match="boom"):
            await client.warn_overloaded_schedule(_schedule(1))

    @pytest.mark.asyncio
    async def test_backend_unavailable_passes_through(self):
        backend = FakeBackend()
        backend.estimate_completion_time = AsyncMock(
            side_effect=EstimationUnavailable("rate limited")
        )
        client = EstimationClient(backend)
        with pytest.raises(EstimationUnavailable, match="rate limited"):
            await client.estimate_completion_time(
                EstimateCompletionTimeInput(task_description="Write report")
            )


class TestBuildEstimationClient:
    def test_disabled_returns_none(self):
        config = AppConfig.model_validate({"estimation": {"enabled": False}})
        assert build_estimation_client(config) is None

    def test_auto_without_key_uses_offline(self):
        client = build_estimation_client(AppConfig())
        assert isinstance(client.backend, OfflineEstimationBackend)
        assert client.capacity_minutes == 480

    def test_auto_with_key_uses_llm(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        client = build_estimation_client(AppConfig())
        assert isinstance(client.backend, LLMEstimationBackend)
        assert client.backend.model == "gpt-4o-mini"

    def test_llm_without_key_falls_back_to_offline(self):
        config = AppConfig.model_validate({"estimation": {"backend": "llm"}})
        assert isinstance(build_estimation_client(config).backend, OfflineEstimationBackend)

    def test_offline_forced_even_with_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        config = AppConfig.model_validate({"estimation": {"backend": "offline"}})
        assert isinstance(build_estimation_client(config).backend, OfflineEstimationBackend)

    def test_custom_key_variable_and_schedule(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "sk-test")
        config = AppConfig.model_validate(
            {
                "estimation": {"api_key_env": "MY_KEY"},
                "schedule": {"daily_capacity_minutes": 300, "default_task_minutes": 45},
            }
        )
        client = build_estimation_client(config)
        assert isinstance(client.backend, LLMEstimationBackend)
        assert client.backend.default_task_minutes == 45
        assert client.capacity_minutes == 300
        assert client.default_task_minutes == 45


class TestClose:
    @pytest.mark.asyncio
    async def test_aclose_closes_backend_client(self):
        backend = FakeBackend()
        backend.close = AsyncMock()
        await EstimationClient(backend).aclose()
        backend.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_aclose_without_backend_close_is_noop(self):
        await EstimationClient(OfflineEstimationBackend()).aclose()
