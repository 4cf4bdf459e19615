# src/contentops/diff/annotator.py

"""Wrap changed blocks for review, and remove the wrappers again.

The wrapper is a plain ``div`` with a marker attribute and a purely
cosmetic inline style. Rich-text editors sometimes drop unknown ``data-``
attributes or rewrite inline styles (``#10b981`` becomes
``rgb(16, 185, 129)``). The stripper recognises a wrapper by the
attribute, or else by a ``div`` whose only attribute is a style carrying
both the wrapper's background tint and its border. Author markup that
shares one of those colours is left alone.
"""

import logging
import re

from bs4 import BeautifulSoup, Tag

from .models import DiffEntry
from .segmenter import HTML_FORMATTER, PARSER

logger = logging.getLogger(__name__)

MARKER_ATTR = "data-contentops-change"

MARKER_STYLE = (
    "background-color: #ecfdf5; "
    "border-left: 4px solid #10b981; "
    "padding: 8px 12px; "
    "margin: 8px 0;"
)

WRAPPER_OPEN = f'<div {MARKER_ATTR}="true" style="{MARKER_STYLE}">'
WRAPPER_CLOSE = "</div>"

# Compared against the style with all whitespace removed, lowercased.
# A wrapper that lost its marker attribute needs both the tint and the border.
_BACKGROUND_SIGNATURES = (
    "background-color:#ecfdf5",
    "background-color:rgb(236,253,245)",
)
_BORDER_SIGNATURES = (
    "border-left:4pxsolid#10b981",
    "border-left:4pxsolidrgb(16,185,129)",
)

_WHITESPACE_RE = re.compile(r"\s+")


def wrap(html: str) -> str:
    return f"{WRAPPER_OPEN}{html}{WRAPPER_CLOSE}"


def annotate(entries: list[DiffEntry]) -> str:
    """Reassemble the candidate with every changed block wrapped.

    Unchanged and protected blocks are emitted exactly as segmented.
    """
    return "".join(
        wrap(e.block.serialized_html) if e.changed else e.block.serialized_html
        for e in entries
    )


def is_marker(tag: Tag) -> bool:
    if tag.name != "div":
        return False
    if tag.has_attr(MARKER_ATTR):
        return True
    if set(tag.attrs) != {"style"}:
        return False
    compact = _WHITESPACE_RE.sub("", str(tag["style"])).lower()
    return any(sig in compact for sig in _BACKGROUND_SIGNATURES) and any(
        sig in compact for sig in _BORDER_SIGNATURES
    )


def strip(annotated_html: str) -> str:
    """Remove review wrappers, keeping whatever is inside them.

    Content a user typed inside a wrapper is kept. HTML with no wrapper
    is returned unchanged, so stripping is idempotent. If the markup
    cannot be parsed it is returned as-is rather than risk losing text.
    """
    if not annotated_html:
        return annotated_html or ""

    try:
        soup = BeautifulSoup(annotated_html, PARSER)
        wrappers = soup.find_all(is_marker)
        if not wrappers:
            return annotated_html
        for wrapper in wrappers:
            wrapper.unwrap()
        cleaned = soup.decode(formatter=HTML_FORMATTER)
    except Exception as e:
        logger.warning("Could not strip review markers, keeping input: %s", e)
        return annotated_html

    logger.debug("Removed %d review wrappers", len(wrappers))
    return cleaned
