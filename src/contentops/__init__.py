# CMS
from .cms import CMSClient, CMSItem, WebflowCMSClient, WebflowConfig

# Config
from .config import ContentOpsConfig

# Diff engine
from .diff import (
    Block,
    BlockKind,
    DiffConfig,
    DiffResult,
    annotate,
    classify,
    detect_changes,
    diff_html,
    rediff,
    segment,
    strip,
)

# LLMs
from .llms import LLMConfig, create_llm_client

# Observability
from .observability import LoggingMetricsHook, MetricsHook, NoOpMetricsHook

# Prompts
from .prompts import Prompt, PromptsLibrary

# Review
from .review import IntegrityReport, ReviewSession, SessionState, check_integrity

# Rewrite
from .rewrite import FactCheckRewriter, RewriteResult, Rewriter

# Search
from .search import BraveSearchClient, SearchConfig, SearchResult

# Workflow
from .workflow import Analysis, ContentOpsWorkflow, create_workflow

__all__ = [
    # CMS
    "CMSClient",
    "CMSItem",
    "WebflowCMSClient",
    "WebflowConfig",
    # Config
    "ContentOpsConfig",
    # Diff engine
    "Block",
    "BlockKind",
    "DiffConfig",
    "DiffResult",
    "annotate",
    "classify",
    "detect_changes",
    "diff_html",
    "rediff",
    "segment",
    "strip",
    # LLMs
    "LLMConfig",
    "create_llm_client",
    # Observability
    "LoggingMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
    # Prompts
    "Prompt",
    "PromptsLibrary",
    # Review
    "IntegrityReport",
    "ReviewSession",
    "SessionState",
    "check_integrity",
    # Rewrite
    "FactCheckRewriter",
    "RewriteResult",
    "Rewriter",
    # Search
    "BraveSearchClient",
    "SearchConfig",
    "SearchResult",
    # Workflow
    "Analysis",
    "ContentOpsWorkflow",
    "create_workflow",
]
