"""Estimation backend that asks an OpenAI-compatible chat model."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from clarity_list.models import EstimationUnavailable

from .prompts import (
    ESTIMATE_SYSTEM_PROMPT,
    OVERLOAD_SYSTEM_PROMPT,
    render_estimate_prompt,
    render_overload_prompt,
)
from .schemas import (
    EstimateCompletionTimeInput,
    EstimateCompletionTimeOutput,
    WarnOverloadedScheduleInput,
    WarnOverloadedScheduleOutput,
)

logger = logging.getLogger(__name__)


def _make_timeout(total_s: float) -> httpx.Timeout:
    return httpx.Timeout(total_s, connect=min(5.0, total_s))


class LLMEstimationBackend:
    """Chat-completion backend returning JSON validated against the schemas.

    The SDK client is created lazily so that no credentials are needed at
    import time. Automatic retries are disabled: a failed call is reported
    once and never retried.
    """

    name = "llm"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 30.0,
        capacity_minutes: int = 480,
        default_task_minutes: int = 60,
        client: AsyncOpenAI | None = None,
    ):
        if not api_key or not api_key.strip():
            raise EstimationUnavailable("Model API key is not set.")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.capacity_minutes = capacity_minutes
        self.default_task_minutes = default_task_minutes
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url or None,
                timeout=_make_timeout(self.timeout_seconds),
                max_retries=0,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _complete_json(
        self, system_prompt: str, user_prompt: str, schema: type[BaseModel]
    ) -> Any:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=0.2,
            )
        except openai.AuthenticationError as e:
            raise EstimationUnavailable(
                "Model authentication failed. Check your API key."
            ) from e
        except openai.RateLimitError as e:
            raise EstimationUnavailable("Model service is rate-limited.") from e
        except (openai.APIConnectionError, openai.APITimeoutError) as e:
            raise EstimationUnavailable("Model service network/timeout error.") from e
        except openai.OpenAIError as e:
            raise EstimationUnavailable(f"Model request failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise EstimationUnavailable("Model returned no choices.") from e
        if not content or not content.strip():
            raise EstimationUnavailable("Model returned no content.")

        try:
            return schema.model_validate_json(content)
        except ValidationError as e:
            logger.info("Rejected model output for %s: %s", schema.__name__, content)
            raise EstimationUnavailable(
                f"Model returned a malformed {schema.__name__}."
            ) from e

    async def estimate_completion_time(
        self, payload: EstimateCompletionTimeInput
    ) -> EstimateCompletionTimeOutput:
        return await self._complete_json(
            ESTIMATE_SYSTEM_PROMPT,
            render_estimate_prompt(payload),
            EstimateCompletionTimeOutput,
        )

    async def warn_overloaded_schedule(
        self, payload: WarnOverloadedScheduleInput
    ) -> WarnOverloadedScheduleOutput:
        system_prompt = OVERLOAD_SYSTEM_PROMPT.format(
            default_task_minutes=self.default_task_minutes,
            capacity_minutes=self.capacity_minutes,
        )
        return await self._complete_json(
            system_prompt,
            render_overload_prompt(payload),
            WarnOverloadedScheduleOutput,
        )
