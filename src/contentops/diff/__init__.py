# src/contentops/diff/__init__.py

"""HTML structural diff and change-highlighting engine.

Compares an original HTML fragment with a rewritten candidate block by
block, flags proseable blocks whose text is new, wraps them for review,
and strips the wrappers again after a user has edited the result.

Example:
    >>> from contentops.diff import diff_html, strip
    >>>
    >>> result = diff_html(
    ...     "<p>Hello world</p>",
    ...     "<p>Hello world</p><p>This is a brand new sentence about pricing.</p>",
    ... )
    >>> result.change_count
    1
    >>> strip(result.annotated_html) == result.clean_html
    True
"""

from .annotator import MARKER_ATTR, annotate, strip
from .classifier import classify
from .config import DEFAULT_CHANGE_THRESHOLD, DiffConfig
from .detector import detect_changes
from .engine import diff_html, rediff
from .models import Block, BlockKind, ChangeSet, DiffEntry, DiffResult
from .segmenter import normalize_text, reassemble, segment

__all__ = [
    # Pipeline
    "segment",
    "classify",
    "detect_changes",
    "annotate",
    "strip",
    "diff_html",
    "rediff",
    # Helpers
    "normalize_text",
    "reassemble",
    "MARKER_ATTR",
    # Config
    "DiffConfig",
    "DEFAULT_CHANGE_THRESHOLD",
    # Types
    "Block",
    "BlockKind",
    "ChangeSet",
    "DiffEntry",
    "DiffResult",
]
