# src/contentops/search/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for the Brave web search client."""

    api_key: str
    result_count: int = 5
    timeout: float = 15.0
    max_retries: int = 3
