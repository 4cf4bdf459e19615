# src/contentops/llms/config.py

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the rewriting model.

    api_key falls back to the provider SDK's own environment variable.
    """

    provider: Literal["openai", "anthropic"]
    model: str
    api_key: str | None = None
    timeout: float = 120.0
    max_retries: int = 3
    max_tokens: int = 8192
