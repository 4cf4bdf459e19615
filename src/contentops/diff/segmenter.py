# src/contentops/diff/segmenter.py

"""Split an HTML fragment into top-level blocks.

Fragments are parsed with BeautifulSoup's ``html.parser`` builder. Unlike
lxml it does not wrap a fragment in ``<html><body>`` or move stray text
into a ``<p>``, so the soup's direct children are exactly the fragment's
top-level nodes.
"""

import logging
import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import PageElement, PreformattedString
from bs4.formatter import HTMLFormatter

from .models import Block

logger = logging.getLogger(__name__)

PARSER = "html.parser"

# Minimal escaping, `<br>` rather than `<br/>`, `allowfullscreen` rather
# than `allowfullscreen=""`. Annotator and stripper serialize with the
# same formatter so a parse/serialize cycle is a fixed point.
HTML_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)

_WHITESPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]*>")


def serialize(node: PageElement) -> str:
    """Serialize a parsed node the same way everywhere in the engine."""
    if isinstance(node, Tag):
        return node.decode(formatter=HTML_FORMATTER)
    if isinstance(node, NavigableString):
        return node.output_ready(formatter=HTML_FORMATTER)
    return str(node)


def normalize_text(html: str) -> str:
    """Return the comparison key for a piece of markup.

    Tags are stripped, entities decoded, runs of whitespace (including
    non-breaking spaces) collapsed to a single space, and the result
    trimmed. Case is preserved.
    """
    if not html:
        return ""
    try:
        text = BeautifulSoup(html, PARSER).get_text()
    except Exception:
        logger.warning("Falling back to regex tag stripping for normalization")
        text = _TAG_RE.sub("", html)
    return _WHITESPACE_RE.sub(" ", text).strip()


def segment(html: str | None) -> list[Block]:
    """Split ``html`` into its ordered top-level blocks.

    - Elements become blocks holding their full outer markup.
    - Non-blank text runs become blocks holding the (escaped) text.
    - Comments, doctypes and other declarations are kept as their own
      blocks so the fragment can be reassembled.
    - Whitespace-only text between blocks is dropped.

    Never raises: markup the parser rejects becomes a single block.
    """
    if not html or not html.strip():
        return []

    try:
        soup = BeautifulSoup(html, PARSER)
        pieces: list[str] = []
        for child in soup.contents:
            if isinstance(child, Tag) or isinstance(child, PreformattedString):
                pieces.append(serialize(child))
            elif isinstance(child, NavigableString) and child.strip():
                pieces.append(serialize(child))
    except Exception as e:
        logger.warning("Could not parse fragment, using it as one block: %s", e)
        return [Block(serialized_html=html, origin_position=0)]

    blocks = [
        Block(serialized_html=piece, origin_position=i)
        for i, piece in enumerate(pieces)
    ]
    logger.debug("Segmented fragment into %d blocks", len(blocks))
    return blocks


def reassemble(blocks: list[Block]) -> str:
    return "".join(b.serialized_html for b in blocks)
