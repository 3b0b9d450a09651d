"""
Review lifecycle helpers: glue between a ReviewSession and the word store.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from vocab.errors import StoreError
from vocab.review.constants import ReviewMode
from vocab.review.due import Scope
from vocab.review.session import Clock, ReviewSession, local_now
from vocab.schemas import Word


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerdictOutcome:
    """
    What happened after a verdict was submitted.
    """
    accepted: bool
    saved: bool
    round_complete: bool = False
    offer_replay: bool = False
    error: Optional[str] = None


class ReviewController:
    """
    Drives a ReviewSession from a word store.

    The store needs list_words() and save_words(words); save_words raises
    StoreError on failure. Verdicts are applied in memory first and buffered;
    a failed save is reported and retried on the next flush, never rolled
    back.
    """

    def __init__(self, store, clock: Optional[Clock] = None):
        self.store = store
        self._clock = clock or local_now
        self.session = ReviewSession(clock=self._clock)
        self._pending: dict[UUID, Word] = {}

    @property
    def pending_saves(self) -> int:
        return len(self._pending)

    def enter(self) -> None:
        """Reset the session when the review surface regains focus."""
        self.session.reset()

    def start(self, mode: ReviewMode, scope: Scope = None) -> list[Word]:
        """
        Start a session over a fresh library snapshot.
        """
        return self.session.start(mode, self._snapshot(), now=self._clock(), scope=scope)

    def current(self) -> Optional[Word]:
        return self.session.present_current()

    def submit(self, word_id: UUID, remembered: bool) -> VerdictOutcome:
        """
        Apply a verdict and persist the updated word.

        Returns:
            VerdictOutcome; saved is False when the store failed (the error
            text is included) or when older changes are still outstanding
        """
        word = self.session.present_current()
        if not self.session.submit_verdict(word_id, remembered, now=self._clock()):
            return VerdictOutcome(accepted=False, saved=not self._pending)

        self._pending[word.id] = word
        error = self.flush()

        return VerdictOutcome(
            accepted=True,
            saved=error is None,
            round_complete=self.session.remaining == 0,
            offer_replay=self.session.offer_replay(),
            error=str(error) if error is not None else None,
        )

    def replay(self, scope: Scope = None) -> list[Word]:
        """Replay the words forgotten in the last round."""
        return self.session.replay_forgotten(self._snapshot(), scope=scope)

    def _snapshot(self) -> list[Word]:
        """
        Library snapshot with unsaved verdicts applied.

        Words still waiting to be saved replace their stale store copies so
        the next verdict builds on the buffered review state.
        """
        self.flush()
        words = self.store.list_words()
        if self._pending:
            words = [self._pending.get(word.id, word) for word in words]
        return words

    def flush(self) -> Optional[StoreError]:
        """
        Persist outstanding verdicts.

        Returns:
            None on success, or the StoreError that was reported
        """
        if not self._pending:
            return None

        try:
            self.store.save_words(list(self._pending.values()))
        except StoreError as exc:
            logger.warning(
                "Could not save %d reviewed words, will retry: %s",
                len(self._pending), exc,
            )
            return exc

        self._pending.clear()
        return None
