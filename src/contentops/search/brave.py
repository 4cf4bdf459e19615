# src/contentops/search/brave.py

import logging
from time import monotonic
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contentops.diff.segmenter import normalize_text
from contentops.observability import names
from contentops.observability.base import MetricsHook, NoOpMetricsHook

from .base import SearchClient, SearchResult

logger = logging.getLogger(__name__)

LABELS = {"provider": "brave"}


class BraveSearchClient(SearchClient):
    """Brave Search web API client.

    Transport errors are retried; HTTP error statuses are raised as
    ``httpx.HTTPStatusError``.
    """

    BASE_URL = "https://api.search.brave.com/res/v1/web/search"

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 15.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            headers={
                "X-Subscription-Token": api_key,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info("Initialized BraveSearchClient with timeout=%s", timeout)

    async def search(self, query: str, *, count: int = 5) -> list[SearchResult]:
        if count <= 0:
            raise ValueError("count must be > 0")

        start = monotonic()
        logger.debug("Searching Brave: query=%r, count=%d", query, count)

        try:
            response = await self._get({"q": query, "count": count})
            response.raise_for_status()
        except httpx.HTTPError:
            self.metrics_hook.increment(names.SEARCH_ERRORS_TOTAL, labels=LABELS)
            raise

        results = self._normalize_results(response.json())[:count]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.SEARCH_DURATION, elapsed_ms, labels=LABELS)
        self.metrics_hook.increment(names.SEARCH_REQUESTS_TOTAL, labels=LABELS)
        logger.info(
            "Brave search: results=%d, latency=%.0fms", len(results), elapsed_ms
        )
        return results

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, params: dict[str, Any]) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.get(self.BASE_URL, params=params)

    def _normalize_results(self, payload: dict[str, Any]) -> list[SearchResult]:
        # Brave highlights query terms with <strong> inside descriptions.
        return [
            SearchResult(
                title=normalize_text(item.get("title", "")),
                url=item.get("url", ""),
                snippet=normalize_text(item.get("description", "")),
            )
            for item in payload.get("web", {}).get("results", [])
        ]
