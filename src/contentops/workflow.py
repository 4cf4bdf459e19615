# src/contentops/workflow.py

"""Fetch a post, rewrite it, review the diff, publish the result."""

import logging
from dataclasses import dataclass, field

from contentops.cms.base import CMSClient, CMSItem
from contentops.cms.webflow import WebflowCMSClient
from contentops.config import ContentOpsConfig
from contentops.diff.config import DiffConfig
from contentops.llms.factory import create_llm_client
from contentops.observability import names
from contentops.observability.base import MetricsHook, NoOpMetricsHook
from contentops.prompts.prompts_library import PromptsLibrary
from contentops.review.integrity import check_integrity
from contentops.review.session import ReviewSession, SessionState
from contentops.rewrite.base import Rewriter, RewriteResult
from contentops.rewrite.fact_check import FactCheckRewriter
from contentops.search.brave import BraveSearchClient

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """A post under review.

    When the rewrite failed the integrity check, ``fallback_reasons``
    lists why and the session compares the original against itself.
    """

    item: CMSItem
    rewrite: RewriteResult
    session: ReviewSession
    fallback_reasons: list[str] = field(default_factory=list)

    @property
    def fell_back(self) -> bool:
        return bool(self.fallback_reasons)


class ContentOpsWorkflow:
    def __init__(
        self,
        cms: CMSClient,
        rewriter: Rewriter,
        *,
        diff_config: DiffConfig = DiffConfig(),
        min_text_ratio: float = 0.5,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._cms = cms
        self._rewriter = rewriter
        self._diff_config = diff_config
        self._min_text_ratio = min_text_ratio
        self.metrics_hook = metrics_hook

    async def list_posts(self) -> list[CMSItem]:
        return await self._cms.list_documents()

    async def analyze(self, item_id: str, instructions: str = "") -> Analysis:
        item = await self._cms.fetch_document(item_id)
        logger.info("Analyzing item %s (%r)", item.id, item.name)

        result = await self._rewriter.rewrite(
            item.body_html, instructions, title=item.name
        )

        report = check_integrity(
            item.body_html, result.content, min_text_ratio=self._min_text_ratio
        )
        candidate = result.content
        if not report.ok:
            self.metrics_hook.increment(names.INTEGRITY_FAILURES_TOTAL)
            logger.warning(
                "Discarding rewrite of item %s: %s", item.id, "; ".join(report.problems)
            )
            candidate = item.body_html

        session = ReviewSession(
            item.body_html,
            candidate,
            config=self._diff_config,
            metrics_hook=self.metrics_hook,
        )
        return Analysis(
            item=item,
            rewrite=result,
            session=session,
            fallback_reasons=report.problems,
        )

    async def publish(self, analysis: Analysis) -> bool:
        """Publish the reviewed document, without review markers."""
        if analysis.session.state is not SessionState.IDLE:
            raise RuntimeError("Cannot publish while an edit is in progress")

        item = analysis.item
        return await self._cms.publish_document(
            item.id,
            analysis.session.clean_html,
            name=item.name,
            summary=item.summary,
        )

    async def aclose(self) -> None:
        await self._cms.aclose()
        await self._rewriter.aclose()


def create_workflow(
    config: ContentOpsConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ContentOpsWorkflow:
    """Wire a workflow against Webflow, Brave Search and the configured LLM."""
    llm = create_llm_client(config.llm, metrics_hook=metrics_hook)
    search = BraveSearchClient(
        config.search.api_key,
        timeout=config.search.timeout,
        max_retries=config.search.max_retries,
        metrics_hook=metrics_hook,
    )
    rewriter = FactCheckRewriter(
        llm,
        search,
        PromptsLibrary(config.prompts_dir),
        max_searches=config.max_searches,
        results_per_search=config.search.result_count,
        max_tokens=config.llm.max_tokens,
        metrics_hook=metrics_hook,
    )
    cms = WebflowCMSClient(config.cms, metrics_hook=metrics_hook)
    return ContentOpsWorkflow(
        cms,
        rewriter,
        diff_config=config.diff,
        min_text_ratio=config.min_text_ratio,
        metrics_hook=metrics_hook,
    )
