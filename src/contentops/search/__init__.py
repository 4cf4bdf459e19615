from .base import SearchClient, SearchResult
from .brave import BraveSearchClient
from .config import SearchConfig

__all__ = [
    "BraveSearchClient",
    "SearchClient",
    "SearchConfig",
    "SearchResult",
]
