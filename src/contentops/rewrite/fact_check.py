# src/contentops/rewrite/fact_check.py

import logging
import re
from time import monotonic
from typing import TypeVar

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field, ValidationError

from contentops.diff.segmenter import PARSER
from contentops.llms.base import LLMClient, Message, Role
from contentops.observability import names
from contentops.observability.base import MetricsHook, NoOpMetricsHook
from contentops.prompts.prompts_library import PromptsLibrary
from contentops.search.base import SearchClient, SearchResult

from .base import Rewriter, RewriteResult

logger = logging.getLogger(__name__)

QUERIES_PROMPT = ("fact_check_queries", "1")
REWRITE_PROMPT = ("fact_check_rewrite", "1")

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$")

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class QueriesPayload(BaseModel):
    queries: list[str] = Field(default_factory=list)


class RewritePayload(BaseModel):
    content: str
    changes: list[str] = Field(default_factory=list)


def parse_payload(raw: str | None, model: type[PayloadT]) -> PayloadT | None:
    """Validate a model's JSON answer, tolerating a markdown code fence."""
    if not raw:
        return None
    try:
        return model.model_validate_json(_FENCE_RE.sub("", raw))
    except ValidationError as e:
        logger.warning(
            "Model output did not match %s: %s", model.__name__, e.errors()[:3]
        )
        return None


def format_evidence(evidence: dict[str, list[SearchResult]]) -> str:
    if not evidence:
        return "(no search results)"
    sections = []
    for query, results in evidence.items():
        lines = [f"Query: {query}"]
        lines.extend(f"- {r.title} ({r.url}): {r.snippet}" for r in results)
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


class FactCheckRewriter(Rewriter):
    """Search-then-rewrite fact checker.

    1. The model proposes up to ``max_searches`` verification queries.
    2. Each query is run against the search client.
    3. The model rewrites the post HTML against that evidence.

    Output the model gets wrong is not retried. An unusable rewrite
    returns the original HTML unchanged, so the diff shows no changes.
    """

    def __init__(
        self,
        llm: LLMClient,
        search: SearchClient,
        prompts: PromptsLibrary,
        *,
        max_searches: int = 3,
        results_per_search: int = 5,
        max_tokens: int = 8192,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if max_searches < 0:
            raise ValueError("max_searches must be >= 0")
        self._llm = llm
        self._search = search
        self._queries_prompt = prompts.get(*QUERIES_PROMPT)
        self._rewrite_prompt = prompts.get(*REWRITE_PROMPT)
        self._max_searches = max_searches
        self._results_per_search = results_per_search
        self._max_tokens = max_tokens
        self.metrics_hook = metrics_hook

    async def rewrite(
        self, html: str, instructions: str = "", *, title: str = ""
    ) -> RewriteResult:
        start = monotonic()
        llm_calls = 0

        queries: list[str] = []
        if self._max_searches:
            queries = await self._propose_queries(html, instructions, title)
            llm_calls += 1

        evidence: dict[str, list[SearchResult]] = {}
        for query in queries:
            evidence[query] = await self._search.search(
                query, count=self._results_per_search
            )

        messages = [
            Message(role=Role.SYSTEM, content=self._rewrite_prompt.system),
            Message(
                role=Role.USER,
                content=self._rewrite_prompt.render(
                    title=title,
                    html=html,
                    evidence=format_evidence(evidence),
                    instructions=instructions,
                ),
            ),
        ]
        response = await self._llm.complete(
            messages=messages, max_tokens=self._max_tokens, response_format="json"
        )
        llm_calls += 1

        payload = parse_payload(response.content, RewritePayload)
        if response.finish_reason == "length":
            logger.warning("Rewrite hit the token limit, keeping the original")
            payload = None

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.REWRITE_DURATION, elapsed_ms)

        if payload is None:
            self.metrics_hook.increment(names.REWRITE_FALLBACKS_TOTAL)
            content, changes = html, []
        else:
            content, changes = payload.content, payload.changes

        logger.info(
            "Rewrite complete: searches=%d, llm_calls=%d, changes=%d, latency=%.0fms",
            len(queries),
            llm_calls,
            len(changes),
            elapsed_ms,
        )
        return RewriteResult(
            content=content,
            changes=changes,
            searches_used=len(queries),
            llm_calls=llm_calls,
            duration_ms=elapsed_ms,
        )

    async def aclose(self) -> None:
        """Close the search and LLM clients this rewriter was built with."""
        try:
            await self._search.aclose()
        finally:
            await self._llm.aclose()

    async def _propose_queries(
        self, html: str, instructions: str, title: str
    ) -> list[str]:
        text = BeautifulSoup(html, PARSER).get_text("\n", strip=True)
        messages = [
            Message(role=Role.SYSTEM, content=self._queries_prompt.system),
            Message(
                role=Role.USER,
                content=self._queries_prompt.render(
                    title=title,
                    text=text,
                    max_queries=str(self._max_searches),
                    instructions=instructions,
                ),
            ),
        ]
        response = await self._llm.complete(messages=messages, response_format="json")
        payload = parse_payload(response.content, QueriesPayload)
        if payload is None:
            return []

        queries = [q.strip() for q in payload.queries if q.strip()]
        logger.debug("Proposed queries: %s", queries)
        return queries[: self._max_searches]
