# src/contentops/diff/classifier.py

"""Decide whether a block is protected from change detection.

Protected blocks (tables, media, embeds, scripts, CMS widgets and
framework markers) are never flagged and never wrapped: the rewriter
regularly regenerates their surrounding markup without changing what
they mean, and a wrapper div can break an embed or a table layout.

Classification looks at the block's own markup only.
"""

import re

from .models import Block, BlockKind

PROTECTED_TAGS = (
    # tables and their required descendants
    "table",
    "thead",
    "tbody",
    "tfoot",
    "tr",
    "td",
    "th",
    "caption",
    "colgroup",
    # media
    "img",
    "figure",
    "picture",
    "video",
    "audio",
    "svg",
    # frames, embeds, scripts
    "iframe",
    "embed",
    "object",
    "script",
    "noscript",
    "style",
    "canvas",
    "form",
)

WIDGET_CLASS_TOKENS = ("widget", "w-embed", "w-widget", "w-richtext")

FRAMEWORK_DATA_PREFIXES = ("data-w-", "data-wf-", "data-widget", "data-rt-")

# A tag name ends at whitespace, `/` or `>`. `<form-field>` is not a form.
_PROTECTED_TAG_RE = re.compile(
    r"<(?:%s)(?=[\s/>])" % "|".join(PROTECTED_TAGS),
    re.IGNORECASE,
)

_WIDGET_CLASS_RE = re.compile(
    r"<[^>]*\sclass\s*=\s*[\"']?[^\"'>]*(?:%s)"
    % "|".join(re.escape(t) for t in WIDGET_CLASS_TOKENS),
    re.IGNORECASE,
)

_FRAMEWORK_DATA_RE = re.compile(
    r"<[^>]*\s(?:%s)" % "|".join(re.escape(p) for p in FRAMEWORK_DATA_PREFIXES),
    re.IGNORECASE,
)

# Comments, doctypes, CDATA: `<!-- wp:paragraph -->` and friends.
_DECLARATION_RE = re.compile(r"^\s*<!")


def classify(block: Block) -> BlockKind:
    html = block.serialized_html
    if (
        _DECLARATION_RE.match(html)
        or _PROTECTED_TAG_RE.search(html)
        or _WIDGET_CLASS_RE.search(html)
        or _FRAMEWORK_DATA_RE.search(html)
    ):
        return BlockKind.PROTECTED
    return BlockKind.PROSEABLE
