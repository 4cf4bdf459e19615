from .integrity import STRUCTURAL_TAGS, IntegrityReport, check_integrity
from .session import EditToken, ReviewSession, SessionState

__all__ = [
    "check_integrity",
    "IntegrityReport",
    "STRUCTURAL_TAGS",
    "ReviewSession",
    "SessionState",
    "EditToken",
]
