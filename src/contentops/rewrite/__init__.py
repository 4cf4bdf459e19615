from .base import RewriteResult, Rewriter
from .fact_check import FactCheckRewriter

__all__ = [
    "FactCheckRewriter",
    "RewriteResult",
    "Rewriter",
]
