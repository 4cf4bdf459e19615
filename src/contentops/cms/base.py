# src/contentops/cms/base.py

from dataclasses import dataclass, field
from typing import Any, Protocol

from contentops.observability.base import MetricsHook


@dataclass(frozen=True)
class CMSItem:
    """A blog post as stored in the CMS.

    ``body_html`` is the document the diff engine works on; name and
    summary are carried along so publishing does not clobber them.
    """

    id: str
    name: str
    body_html: str
    summary: str | None = None
    field_data: dict[str, Any] = field(default_factory=dict)


class CMSClient(Protocol):
    """Read and write access to the blog collection."""

    metrics_hook: MetricsHook

    async def list_documents(self) -> list[CMSItem]: ...

    async def fetch_document(self, item_id: str) -> CMSItem: ...

    async def publish_document(
        self,
        item_id: str,
        html: str,
        *,
        name: str | None = None,
        summary: str | None = None,
    ) -> bool:
        """Write ``html`` as the item's body. Returns False if the CMS refused."""
        ...

    async def aclose(self) -> None: ...
