# src/contentops/review/session.py

import logging
import uuid
from dataclasses import dataclass
from enum import Enum

from contentops.diff.config import DiffConfig
from contentops.diff.engine import diff_html, rediff
from contentops.diff.models import DiffResult
from contentops.observability import names
from contentops.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SYNCING = "syncing"


@dataclass(frozen=True)
class EditToken:
    """Proof that the holder opened the current edit.

    Tied to one session and to one `begin_edit` call. A token from an
    earlier (committed or cancelled) edit or from another session is
    rejected.
    """

    session_id: str
    edit_id: int
    revision: int


class ReviewSession:
    """Review state for one candidate document.

    Hosts that let users edit the annotated view drive the session through
    ``Idle -> Editing -> Syncing -> Idle``: ``begin_edit`` hands out a
    token, ``commit_edit`` strips the review wrappers from the edited HTML
    and re-diffs it against the original. Writes and re-annotation never
    interleave.
    """

    def __init__(
        self,
        original_html: str,
        candidate_html: str,
        *,
        config: DiffConfig = DiffConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._id = uuid.uuid4().hex
        self._original_html = original_html
        self._config = config
        self.metrics_hook = metrics_hook
        self._state = SessionState.IDLE
        self._revision = 0
        self._edit_id = 0
        self._result = diff_html(
            original_html, candidate_html, config=config, metrics_hook=metrics_hook
        )
        logger.info(
            "Opened review session %s with %d changes",
            self._id,
            self._result.change_count,
        )

    @property
    def session_id(self) -> str:
        return self._id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def original_html(self) -> str:
        return self._original_html

    @property
    def result(self) -> DiffResult:
        return self._result

    @property
    def annotated_html(self) -> str:
        return self._result.annotated_html

    @property
    def clean_html(self) -> str:
        return self._result.clean_html

    @property
    def change_count(self) -> int:
        return self._result.change_count

    def begin_edit(self) -> EditToken:
        if self._state is not SessionState.IDLE:
            raise RuntimeError(f"Cannot begin an edit while {self._state.value}")
        self._state = SessionState.EDITING
        self._edit_id += 1
        logger.debug("Session %s: edit started at revision %d", self._id, self._revision)
        return EditToken(
            session_id=self._id, edit_id=self._edit_id, revision=self._revision
        )

    def commit_edit(self, token: EditToken, edited_html: str) -> DiffResult:
        """Accept the user's edited (still annotated) HTML and re-diff it."""
        self._check_token(token)
        self._state = SessionState.SYNCING
        try:
            self._result = rediff(
                self._original_html,
                edited_html,
                config=self._config,
                metrics_hook=self.metrics_hook,
            )
            self._revision += 1
        finally:
            self._state = SessionState.IDLE

        self.metrics_hook.increment(names.REVIEW_EDITS_COMMITTED)
        logger.info(
            "Session %s: revision %d committed with %d changes",
            self._id,
            self._revision,
            self._result.change_count,
        )
        return self._result

    def cancel_edit(self, token: EditToken) -> None:
        self._check_token(token)
        self._state = SessionState.IDLE
        logger.debug("Session %s: edit cancelled", self._id)

    def _check_token(self, token: EditToken) -> None:
        if self._state is not SessionState.EDITING:
            raise RuntimeError(f"No edit in progress (session is {self._state.value})")
        if token.session_id != self._id or token.edit_id != self._edit_id:
            raise RuntimeError("Edit token is stale or belongs to another session")
