# src/contentops/cms/webflow.py

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

from contentops.observability import names
from contentops.observability.base import MetricsHook, NoOpMetricsHook

from .base import CMSClient, CMSItem
from .config import WebflowConfig

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class WebflowCMSClient(CMSClient):
    """Webflow Data API v2 client for one blog collection."""

    BASE_URL = "https://api.webflow.com/v2"

    def __init__(
        self,
        config: WebflowConfig,
        *,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers={
                "Authorization": f"Bearer {config.api_token}",
                "accept": "application/json",
            },
            timeout=config.timeout,
            transport=transport,
        )
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized WebflowCMSClient for collection=%s", config.collection_id
        )

    @property
    def _items_path(self) -> str:
        return f"/collections/{self._config.collection_id}/items"

    async def list_documents(self) -> list[CMSItem]:
        items: list[CMSItem] = []
        offset = 0
        while True:
            response = await self._request(
                "GET",
                self._items_path,
                params={"offset": offset, "limit": PAGE_SIZE},
            )
            response.raise_for_status()
            payload = response.json()

            page = payload.get("items") or []
            items.extend(self._to_item(raw) for raw in page)

            total = payload.get("pagination", {}).get("total", len(items))
            offset += len(page)
            if not page or offset >= total:
                break

        logger.info("Fetched %d items from Webflow", len(items))
        return items

    async def fetch_document(self, item_id: str) -> CMSItem:
        response = await self._request("GET", f"{self._items_path}/{item_id}")
        response.raise_for_status()
        return self._to_item(response.json())

    async def publish_document(
        self,
        item_id: str,
        html: str,
        *,
        name: str | None = None,
        summary: str | None = None,
    ) -> bool:
        field_data: dict[str, Any] = {self._config.body_field: html}
        if name is not None:
            field_data[self._config.name_field] = name
        if summary is not None:
            field_data[self._config.summary_field] = summary

        path = f"{self._items_path}/{item_id}"
        if self._config.live:
            path += "/live"

        response = await self._request("PATCH", path, json={"fieldData": field_data})
        if not response.is_success:
            logger.error(
                "Webflow rejected update of item %s: status=%d, body=%s",
                item_id,
                response.status_code,
                response.text[:500],
            )
            return False

        logger.info("Published item %s (%d chars)", item_id, len(html))
        return True

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        start = monotonic()
        labels = {"provider": "webflow", "method": method}
        try:
            response = await self._send(method, path, **kwargs)
        except httpx.TransportError:
            self.metrics_hook.increment(names.CMS_ERRORS_TOTAL, labels=labels)
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.CMS_REQUEST_DURATION, elapsed_ms, labels=labels
        )
        self.metrics_hook.increment(names.CMS_REQUESTS_TOTAL, labels=labels)
        if response.is_error:
            self.metrics_hook.increment(names.CMS_ERRORS_TOTAL, labels=labels)
        logger.debug(
            "Webflow %s %s: status=%d, latency=%.0fms",
            method,
            path,
            response.status_code,
            elapsed_ms,
        )
        return response

    async def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._config.max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.request(method, path, **kwargs)

    def _to_item(self, raw: dict[str, Any]) -> CMSItem:
        field_data = raw.get("fieldData") or {}
        return CMSItem(
            id=raw["id"],
            name=field_data.get(self._config.name_field, ""),
            body_html=field_data.get(self._config.body_field) or "",
            summary=field_data.get(self._config.summary_field),
            field_data=dict(field_data),
        )
