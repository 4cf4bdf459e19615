# src/contentops/diff/detector.py

import logging

from .config import DEFAULT_CHANGE_THRESHOLD
from .models import Block, BlockKind, ChangeSet, DiffEntry

logger = logging.getLogger(__name__)


def document_text(blocks: list[Block]) -> str:
    """Normalized text of a whole document, one space between blocks."""
    return " ".join(b.normalized_text for b in blocks if b.normalized_text)


def detect_changes(
    original: list[Block],
    candidate: list[Block],
    *,
    threshold: int = DEFAULT_CHANGE_THRESHOLD,
) -> ChangeSet:
    """Flag candidate blocks whose text does not appear in the original.

    Matching is by content identity, not position: a block that moved but
    kept its normalized text is unchanged, while a one-word paraphrase
    flags the whole block. A candidate block is changed only when

    - its normalized text is absent from the original,
    - it is proseable, and
    - its normalized text is strictly longer than ``threshold``.

    If both documents normalize to the same full text nothing is flagged,
    whatever the markup differences.
    """
    if threshold < 0:
        raise ValueError("threshold must be >= 0")

    if document_text(original) == document_text(candidate):
        logger.debug("Documents are text-identical, no changes")
        return ChangeSet(
            entries=[DiffEntry(block=b, changed=False) for b in candidate],
            change_count=0,
        )

    # Duplicate texts collapse: any original block with the text is a match.
    seen = {b.normalized_text for b in original}

    entries: list[DiffEntry] = []
    change_count = 0
    for block in candidate:
        text = block.normalized_text
        changed = (
            text not in seen
            and block.classification is BlockKind.PROSEABLE
            and len(text) > threshold
        )
        if changed:
            change_count += 1
        entries.append(DiffEntry(block=block, changed=changed))

    logger.debug(
        "Compared %d candidate blocks against %d original blocks: %d changed",
        len(candidate),
        len(original),
        change_count,
    )
    return ChangeSet(entries=entries, change_count=change_count)
