# src/contentops/diff/engine.py

import logging
from time import monotonic

from contentops.observability import names
from contentops.observability.base import MetricsHook, NoOpMetricsHook

from .annotator import annotate, strip
from .config import DiffConfig
from .detector import detect_changes
from .models import DiffResult
from .segmenter import reassemble, segment

logger = logging.getLogger(__name__)


def diff_html(
    original_html: str,
    candidate_html: str,
    *,
    config: DiffConfig = DiffConfig(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> DiffResult:
    """Compare a candidate document against the original and annotate it.

    Pure and synchronous. Blocks are rebuilt on every call.
    """
    start = monotonic()

    original = segment(original_html)
    candidate = segment(candidate_html)
    change_set = detect_changes(original, candidate, threshold=config.threshold)

    annotated_html = annotate(change_set.entries)
    clean_html = reassemble(candidate)

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.DIFF_DURATION, elapsed_ms)
    metrics_hook.record_gauge(names.DIFF_BLOCKS_TOTAL, len(candidate))
    metrics_hook.record_gauge(names.DIFF_BLOCKS_CHANGED, change_set.change_count)

    logger.info(
        "Diff complete: blocks=%d, changed=%d, latency=%.1fms",
        len(candidate),
        change_set.change_count,
        elapsed_ms,
    )

    return DiffResult(
        entries=change_set.entries,
        change_count=change_set.change_count,
        annotated_html=annotated_html,
        clean_html=clean_html,
    )


def rediff(
    original_html: str,
    edited_html: str,
    *,
    config: DiffConfig = DiffConfig(),
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> DiffResult:
    """Strip review wrappers from an edited document and diff it again."""
    start = monotonic()
    cleaned = strip(edited_html)
    metrics_hook.record_latency(names.STRIP_DURATION, 1000 * (monotonic() - start))
    return diff_html(
        original_html, cleaned, config=config, metrics_hook=metrics_hook
    )
