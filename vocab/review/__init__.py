"""
Review - spaced-repetition scheduling for vocabulary words.

Two pieces:
- Due-word selection: which words qualify for a session, using an
  interval table keyed by review count and calendar days since the last
  review
- Review session: the queue state machine that presents words one at a
  time, applies remembered/forgot verdicts and handles forgotten-word
  replays

Quick start:
    from vocab.review import ReviewMode, ReviewSession

    session = ReviewSession()
    session.start(ReviewMode.RECOMMENDED_REVIEW, words)
    word = session.present_current()
    session.submit_verdict(word.id, remembered=True)
"""

# Constants and enums
from vocab.review.constants import (
    INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    CompletionKind,
    ReviewMode,
    SessionState,
)

# Due-word selection
from vocab.review.due import (
    due_count,
    filter_scope,
    interval_for,
    is_due,
    select_due,
    select_for_mode,
    whole_days_between,
)

# Session state machine
from vocab.review.session import ReviewSession, local_now
from vocab.review.controller import ReviewController, VerdictOutcome


__all__ = [
    # Enums and parameters
    "INTERVAL_DAYS",
    "MAX_INTERVAL_DAYS",
    "CompletionKind",
    "ReviewMode",
    "SessionState",

    # Selection
    "due_count",
    "filter_scope",
    "interval_for",
    "is_due",
    "select_due",
    "select_for_mode",
    "whole_days_between",

    # Sessions
    "ReviewSession",
    "ReviewController",
    "VerdictOutcome",
    "local_now",
]
