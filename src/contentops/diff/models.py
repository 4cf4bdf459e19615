# src/contentops/diff/models.py

from dataclasses import dataclass
from enum import Enum
from functools import cached_property


class BlockKind(str, Enum):
    """Whether a block may be reported as changed."""

    PROTECTED = "protected"
    PROSEABLE = "proseable"


@dataclass(frozen=True)
class Block:
    """One top-level node of an HTML fragment.

    Only ``serialized_html`` and ``origin_position`` are stored. The
    normalized text and the classification are derived from the markup
    on first access, so two blocks with the same markup always compare
    the same way.
    """

    serialized_html: str
    origin_position: int

    @cached_property
    def normalized_text(self) -> str:
        from .segmenter import normalize_text

        return normalize_text(self.serialized_html)

    @cached_property
    def classification(self) -> BlockKind:
        from .classifier import classify

        return classify(self)

    @property
    def is_protected(self) -> bool:
        return self.classification is BlockKind.PROTECTED


@dataclass(frozen=True)
class DiffEntry:
    block: Block
    changed: bool


@dataclass(frozen=True)
class ChangeSet:
    """Candidate blocks in document order, each flagged changed or not."""

    entries: list[DiffEntry]
    change_count: int

    @property
    def changed_blocks(self) -> list[Block]:
        return [e.block for e in self.entries if e.changed]


@dataclass(frozen=True)
class DiffResult:
    """Everything a review surface needs from one diff invocation.

    ``clean_html`` is the unannotated candidate reconstruction;
    ``annotated_html`` is the same document with changed blocks wrapped.
    """

    entries: list[DiffEntry]
    change_count: int
    annotated_html: str
    clean_html: str
