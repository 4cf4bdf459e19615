# src/contentops/observability/names.py

"""Standard metric names for contentops observability.

Use these constants instead of hardcoded strings so dashboards and
alerts keep working when call sites move.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Diff Engine Metrics
# ============================================================================

# Duration
DIFF_DURATION = "diff_duration"
STRIP_DURATION = "diff_strip_duration"

# Gauges (per diff invocation)
DIFF_BLOCKS_TOTAL = "diff_blocks_total"
DIFF_BLOCKS_CHANGED = "diff_blocks_changed"


# ============================================================================
# Review Metrics
# ============================================================================

REVIEW_EDITS_COMMITTED = "review_edits_committed"
INTEGRITY_FAILURES_TOTAL = "integrity_failures_total"


# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"

# Counters (token usage)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Search Metrics
# ============================================================================

SEARCH_DURATION = "search_duration"
SEARCH_REQUESTS_TOTAL = "search_requests_total"
SEARCH_ERRORS_TOTAL = "search_errors_total"


# ============================================================================
# CMS Metrics
# ============================================================================

CMS_REQUEST_DURATION = "cms_request_duration"
CMS_REQUESTS_TOTAL = "cms_requests_total"
CMS_ERRORS_TOTAL = "cms_errors_total"


# ============================================================================
# Rewrite Metrics
# ============================================================================

REWRITE_DURATION = "rewrite_duration"
REWRITE_FALLBACKS_TOTAL = "rewrite_fallbacks_total"
