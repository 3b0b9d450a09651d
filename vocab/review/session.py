"""
Review Session - queue state machine for one review pass.

States:
    MODE_SELECTION -> PRESENTING -> ROUND_COMPLETE -> MODE_SELECTION
                                                   +-> PRESENTING (replay)

Main workflow:
1. start(mode, words) builds the queue from the due-word selector
2. present_current() shows the front word
3. submit_verdict(word_id, remembered) applies the verdict and advances
4. When the queue empties, the round is complete; offer_replay() tells
   the caller whether to prompt for a forgotten-word replay

All methods are synchronous. Stale or duplicate verdicts and overlapping
starts are ignored rather than raised, so UI event races cannot corrupt
the queue.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Callable, Iterable, Optional
from uuid import UUID

from vocab.review import due
from vocab.review.constants import CompletionKind, ReviewMode, SessionState
from vocab.schemas import Word


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


class ReviewSession:
    """
    Owns the queue, forgotten set and mode of the active review session.

    Words in the queue are the store's snapshot objects; verdicts mutate
    them in place and the caller persists them.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or local_now
        self.reset()

    # ---- Read-only state ----

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> Optional[ReviewMode]:
        return self._mode

    @property
    def mode_selected(self) -> bool:
        """True while the review surface should show cards instead of mode buttons."""
        return self._mode_selected

    @property
    def queue(self) -> tuple[Word, ...]:
        return tuple(self._queue)

    @property
    def forgotten(self) -> frozenset[UUID]:
        return frozenset(self._forgotten)

    @property
    def remaining(self) -> int:
        return len(self._queue)

    # ---- Transitions ----

    def reset(self) -> None:
        """
        Drop all session state.

        Called whenever the review surface is (re-)entered so nothing from
        a previous visit carries over.
        """
        self._queue: list[Word] = []
        self._forgotten: set[UUID] = set()
        self._mode: Optional[ReviewMode] = None
        self._mode_selected = False
        self._starting = False
        self._state = SessionState.MODE_SELECTION
        self._round_size = 0
        self._replay_offered = False

    def start(
        self,
        mode: ReviewMode,
        words: Iterable[Word],
        now: Optional[datetime] = None,
        scope: due.Scope = None,
    ) -> list[Word]:
        """
        Start a session in `mode` over a library snapshot.

        Rejected while another start is in flight or a pass is still being
        presented; the existing queue is returned unchanged in that case.
        An empty selection completes the round immediately ("nothing to
        review"), which is not an error.

        Args:
            mode: Review mode, fixed for the whole session
            words: Library snapshot in presentation order
            now: Current time (defaults to the session clock)
            scope: Optional word-id set from the sheet picker

        Returns:
            The new session queue
        """
        if self._starting or self._state == SessionState.PRESENTING:
            logger.debug("Ignoring start(%s): session already active", mode)
            return list(self._queue)

        self._starting = True
        try:
            if now is None:
                now = self._clock()

            if mode in (ReviewMode.REVIEW_ALL, ReviewMode.RECOMMENDED_REVIEW):
                self._forgotten.clear()

            queue = due.select_for_mode(mode, words, now, scope, self._forgotten)

            # Words pending review this pass are not "forgotten" yet
            self._forgotten.difference_update(word.id for word in queue)

            self._mode = mode
            self._mode_selected = True
            self._queue = queue
            self._round_size = len(queue)
            self._replay_offered = False

            if queue:
                self._state = SessionState.PRESENTING
            else:
                self._complete_round()

            logger.debug("Started %s session with %d words", mode.value, len(queue))
            return list(queue)
        finally:
            self._starting = False

    def present_current(self) -> Optional[Word]:
        """Return the front word without removing it, or None when the round is over."""
        if not self._queue:
            return None
        return self._queue[0]

    def submit_verdict(
        self,
        word_id: UUID,
        remembered: bool,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Apply the user's verdict to the front word.

        Rules:
        - remembered: mark learned, drop from the forgotten set
        - forgot: add to the forgotten set; in REVIEW_ALL also mark unlearned
        - either way: review_count += 1, last_reviewed = now

        A verdict for anything other than the current front word is ignored.

        Returns:
            True if the verdict was applied
        """
        if not self._queue or self._queue[0].id != word_id:
            logger.debug("Ignoring stale verdict for %s", word_id)
            return False

        if now is None:
            now = self._clock()

        word = self._queue.pop(0)

        if remembered:
            word.learned = True
            self._forgotten.discard(word.id)
        else:
            # Not re-queued: each word shows up once per pass
            self._forgotten.add(word.id)
            if self._mode == ReviewMode.REVIEW_ALL:
                word.learned = False

        word.review_count += 1
        word.last_reviewed = now

        if not self._queue:
            self._complete_round()

        return True

    def offer_replay(self) -> bool:
        """
        Whether to prompt "review forgotten words again?".

        Only a CONTINUE_LAST round that ended with forgotten words offers it.
        """
        return self._state == SessionState.ROUND_COMPLETE and self._replay_offered

    def replay_forgotten(self, words: Iterable[Word], scope: due.Scope = None) -> list[Word]:
        """
        Start a replay pass over the words forgotten this session.

        The queue is rebuilt from the scoped library (library order), the
        forgotten set is cleared and the same mode is kept. If nothing
        remains the session returns to mode selection.

        Returns:
            The replay queue
        """
        if self._state != SessionState.ROUND_COMPLETE or self._mode is None:
            logger.debug("Ignoring replay: no completed round")
            return list(self._queue)

        forgotten = set(self._forgotten)
        queue = [word for word in due.filter_scope(words, scope) if word.id in forgotten]
        self._forgotten.clear()
        self._replay_offered = False

        if not queue:
            self._queue = []
            self._mode = None
            self._mode_selected = False
            self._state = SessionState.MODE_SELECTION
            return []

        self._queue = queue
        self._round_size = len(queue)
        self._mode_selected = True
        self._state = SessionState.PRESENTING
        logger.debug("Replaying %d forgotten words", len(queue))
        return list(queue)

    def completion_kind(self) -> Optional[CompletionKind]:
        """
        Which completion screen to show, or None if the round is not over.
        """
        if self._state != SessionState.ROUND_COMPLETE:
            return None
        if self._round_size == 0:
            return CompletionKind.NOTHING_TO_REVIEW
        if self._mode == ReviewMode.RECOMMENDED_REVIEW:
            return CompletionKind.RECOMMENDED_DONE
        if self._mode == ReviewMode.CONTINUE_LAST and self._forgotten:
            return CompletionKind.ROUND_WITH_FORGOTTEN
        return CompletionKind.ALL_REVIEWED

    def _complete_round(self) -> None:
        self._state = SessionState.ROUND_COMPLETE
        self._mode_selected = False
        self._replay_offered = (
            self._mode == ReviewMode.CONTINUE_LAST and bool(self._forgotten)
        )
