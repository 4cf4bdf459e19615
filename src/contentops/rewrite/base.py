# src/contentops/rewrite/base.py

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class RewriteResult:
    """Output of one rewrite.

    ``content`` is the candidate HTML handed to the diff engine; the
    counters are reported to the reviewer alongside the change list.
    """

    content: str
    changes: list[str] = field(default_factory=list)
    searches_used: int = 0
    llm_calls: int = 0
    duration_ms: float = 0.0


class Rewriter(Protocol):
    async def rewrite(
        self, html: str, instructions: str = "", *, title: str = ""
    ) -> RewriteResult: ...

    async def aclose(self) -> None: ...
