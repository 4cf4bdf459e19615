# src/contentops/llms/factory.py

import logging

from contentops.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import LLMConfig

logger = logging.getLogger(__name__)


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Build the rewriting model's client from config.

    ``config.max_tokens`` becomes the client's default response limit, used
    by every call that does not pass its own. Provider SDKs are imported
    only for the provider that is selected.

    Raises:
        ValueError: If provider is unknown.

    Example:
        >>> config = LLMConfig(provider="anthropic", model="claude-sonnet-4-20250514")
        >>> client = create_llm_client(config)
    """
    client_cls: type[LLMClient]
    if config.provider == "openai":
        from .openai import OpenAILLMClient

        client_cls = OpenAILLMClient
    elif config.provider == "anthropic":
        from .anthropic import AnthropicLLMClient

        client_cls = AnthropicLLMClient
    else:
        raise ValueError(f"Unknown LLM provider: {config.provider}")

    logger.debug(
        "Creating %s client for model=%s, max_tokens=%d",
        config.provider,
        config.model,
        config.max_tokens,
    )
    return client_cls(
        api_key=config.api_key,
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        max_tokens=config.max_tokens,
        metrics_hook=metrics_hook,
    )
