# src/contentops/llms/anthropic.py

import logging
from time import monotonic
from typing import Any

from anthropic import NOT_GIVEN, APIError, AsyncAnthropic
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contentops.observability import names
from contentops.observability.base import MetricsHook, NoOpMetricsHook

from .base import (
    FinishReason,
    LLMClient,
    LLMResponse,
    Message,
    ResponseFormat,
    Role,
    Usage,
)

logger = logging.getLogger(__name__)

# Anthropic requires max_tokens on every request.
DEFAULT_MAX_TOKENS = 4096


class AnthropicLLMClient(LLMClient):
    """Anthropic messages client.

    Stateless. Transport-only retries. Anthropic has no JSON response
    mode; ``response_format="json"`` is left to the prompt.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-20250514",
        timeout: float = 120.0,
        max_retries: int = 3,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        self._model = model
        self._max_retries = max_retries
        self._max_tokens = max_tokens
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized AnthropicLLMClient with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
        response_format: ResponseFormat = "text",
    ) -> LLMResponse:
        start = monotonic()
        labels = {"provider": "anthropic", "model": self._model}

        system_content, non_system_messages = self._extract_system(messages)

        logger.debug(
            "Calling Anthropic: model=%s, messages=%d, format=%s",
            self._model,
            len(messages),
            response_format,
        )

        try:
            raw = await self._call_api(
                system=system_content,
                messages=[
                    {"role": m.role.value, "content": m.content}
                    for m in non_system_messages
                ],
                temperature=temperature,
                max_tokens=max_tokens or self._max_tokens,
            )
        except APIError:
            self.metrics_hook.increment(names.LLM_ERRORS_TOTAL, labels=labels)
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        response = self._normalize_response(raw, elapsed_ms)

        self.metrics_hook.record_latency(
            names.LLM_COMPLETION_DURATION, elapsed_ms, labels=labels
        )
        self.metrics_hook.increment(names.LLM_REQUESTS_TOTAL, labels=labels)
        self.metrics_hook.increment(
            names.LLM_TOKENS_PROMPT, response.usage.prompt_tokens
        )
        self.metrics_hook.increment(
            names.LLM_TOKENS_COMPLETION, response.usage.completion_tokens
        )
        self.metrics_hook.increment(names.LLM_TOKENS_TOTAL, response.usage.total_tokens)

        logger.info(
            "Anthropic completion: finish=%s, tokens=%d, latency=%.0fms",
            response.finish_reason,
            response.usage.total_tokens,
            elapsed_ms,
        )
        return response

    async def aclose(self) -> None:
        await self._client.close()

    async def _call_api(
        self,
        *,
        system: str | None,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
    ) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(APIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.messages.create(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens,
                    system=system if system else NOT_GIVEN,
                )

    def _extract_system(
        self, messages: list[Message]
    ) -> tuple[str | None, list[Message]]:
        """Anthropic takes the system prompt as a separate parameter."""
        system_parts = [m.content for m in messages if m.role == Role.SYSTEM]
        non_system = [m for m in messages if m.role != Role.SYSTEM]
        return ("\n\n".join(system_parts) or None), non_system

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        text_parts = [block.text for block in raw.content if block.type == "text"]

        finish_reason: FinishReason
        if raw.stop_reason == "end_turn":
            finish_reason = "stop"
        elif raw.stop_reason == "max_tokens":
            finish_reason = "length"
        else:
            finish_reason = "error"

        return LLMResponse(
            content="".join(text_parts) if text_parts else None,
            finish_reason=finish_reason,
            usage=Usage(
                prompt_tokens=raw.usage.input_tokens,
                completion_tokens=raw.usage.output_tokens,
                total_tokens=raw.usage.input_tokens + raw.usage.output_tokens,
            ),
            latency_ms=latency_ms,
        )
