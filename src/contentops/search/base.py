# src/contentops/search/base.py

from dataclasses import dataclass
from typing import Protocol

from contentops.observability.base import MetricsHook


@dataclass(frozen=True)
class SearchResult:
    title: str
    url: str
    snippet: str


class SearchClient(Protocol):
    """Web search used to gather evidence for fact-checking."""

    metrics_hook: MetricsHook

    async def search(self, query: str, *, count: int = 5) -> list[SearchResult]: ...

    async def aclose(self) -> None: ...
