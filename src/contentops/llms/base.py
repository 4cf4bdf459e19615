# src/contentops/llms/base.py

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from contentops.observability.base import MetricsHook

FinishReason = Literal["stop", "length", "error"]
ResponseFormat = Literal["text", "json"]


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in the conversation. Provider-agnostic."""

    role: Role
    content: str


@dataclass(frozen=True)
class Usage:
    """Token usage for a completion."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class LLMResponse:
    """Normalized LLM response.

    Provider objects never leave the adapter; this is the only type
    the rewriter sees.
    """

    content: str | None
    finish_reason: FinishReason
    usage: Usage
    latency_ms: float


class LLMClient(Protocol):
    """Protocol for LLM clients used by the rewriter.

    - Stateless: every call receives the full message list
    - Transport-only retries (network, rate limit)
    - Bad model output is never retried; the caller decides what to do
    """

    metrics_hook: MetricsHook

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
        response_format: ResponseFormat = "text",
    ) -> LLMResponse:
        """Single completion.

        Args:
            messages: Complete conversation, system message included.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in the response. ``None`` uses the
                client's default. Rewrites of long posts need a generous
                limit or the HTML comes back cut off.
            response_format: ``"json"`` asks the provider for a JSON object
                where it supports it. Callers must still validate.

        Raises:
            Provider-specific errors after retry exhaustion.
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        ...
