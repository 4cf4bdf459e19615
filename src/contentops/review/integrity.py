# src/contentops/review/integrity.py

"""Sanity checks on rewriter output before it reaches the diff engine.

The rewriter is an LLM. It can truncate a post, drop a table or an
embed, or answer with prose instead of HTML. The diff engine assumes it
is given two plausible HTML documents, so callers run these checks
first and fall back to the original when they fail.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from contentops.diff.segmenter import PARSER, normalize_text

logger = logging.getLogger(__name__)

STRUCTURAL_TAGS = (
    "table",
    "iframe",
    "img",
    "figure",
    "script",
    "embed",
    "object",
    "video",
)


@dataclass(frozen=True)
class IntegrityReport:
    problems: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems


def _structure(html: str) -> tuple[Counter, bool]:
    soup = BeautifulSoup(html or "", PARSER)
    counts = Counter(tag.name for tag in soup.find_all(list(STRUCTURAL_TAGS)))
    return counts, soup.find() is not None


def check_integrity(
    original_html: str,
    candidate_html: str,
    *,
    min_text_ratio: float = 0.5,
) -> IntegrityReport:
    """Compare a candidate against its original for obvious damage.

    Reports:
    - ``not html``: the original has elements, the candidate has none
    - ``lost <tag>``: fewer tables, embeds, images, ... than the original
    - ``truncated``: candidate text shorter than ``min_text_ratio`` of the
      original's
    """
    if not 0.0 <= min_text_ratio <= 1.0:
        raise ValueError("min_text_ratio must be between 0 and 1")

    problems: list[str] = []

    try:
        original_counts, original_has_elements = _structure(original_html)
        candidate_counts, candidate_has_elements = _structure(candidate_html)
    except Exception as e:
        logger.warning("Integrity check could not parse documents: %s", e)
        return IntegrityReport(problems=["unparsable"])

    if original_has_elements and not candidate_has_elements:
        problems.append("not html")

    for tag in STRUCTURAL_TAGS:
        if candidate_counts[tag] < original_counts[tag]:
            problems.append(
                f"lost {tag} ({original_counts[tag]} -> {candidate_counts[tag]})"
            )

    original_len = len(normalize_text(original_html))
    candidate_len = len(normalize_text(candidate_html))
    if original_len and candidate_len < min_text_ratio * original_len:
        problems.append(f"truncated ({original_len} -> {candidate_len} chars)")

    if problems:
        logger.warning("Candidate failed integrity check: %s", "; ".join(problems))
    return IntegrityReport(problems=problems)
