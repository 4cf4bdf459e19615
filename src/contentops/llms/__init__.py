# src/contentops/llms/__init__.py

"""LLM client layer used by the rewriter.

A thin, stateless, async abstraction over OpenAI and Anthropic.

Example:
    >>> from contentops.llms import create_llm_client, LLMConfig, Message, Role
    >>>
    >>> client = create_llm_client(LLMConfig(provider="openai", model="gpt-4o"))
    >>> response = await client.complete(
    ...     messages=[Message(role=Role.USER, content="Rewrite this paragraph")]
    ... )
"""

from .base import LLMClient, LLMResponse, Message, Role, Usage
from .config import LLMConfig
from .factory import create_llm_client

__all__ = [
    # Factory
    "create_llm_client",
    # Protocol
    "LLMClient",
    # Config
    "LLMConfig",
    # Types
    "Message",
    "Role",
    "LLMResponse",
    "Usage",
]
