"""
Due-Word Selection

Decides which words qualify for a review session.

Key concepts:
- Interval: days that must pass since the last review, taken from
  INTERVAL_DAYS by review_count (capped at the last entry)
- Days since review: calendar days (midnight to midnight), not elapsed hours
- Scope: an optional set of word ids chosen by the sheet picker

Everything here is pure: no clock reads, no store access.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import AbstractSet, Iterable, Optional
from uuid import UUID

from vocab.review.constants import INTERVAL_DAYS, MAX_INTERVAL_DAYS, ReviewMode
from vocab.schemas import Word


Scope = Optional[AbstractSet[UUID]]


def interval_for(review_count: int) -> int:
    """
    Return the review interval in days for a word's review count.

    Counts past the end of the table repeat the last interval.
    """
    if review_count < 0:
        review_count = 0
    if review_count >= len(INTERVAL_DAYS):
        return MAX_INTERVAL_DAYS
    return INTERVAL_DAYS[review_count]


def whole_days_between(start: datetime, end: datetime) -> int:
    """
    Count calendar days between two timestamps.

    Both timestamps are read in end's timezone and only their dates are
    compared, so 23:00 -> 01:00 the next morning is one day. Naive values
    are taken as UTC when the other side is aware.

    Args:
        start: Earlier timestamp (e.g. last review)
        end: Later timestamp (e.g. now)

    Returns:
        Non-negative number of calendar days
    """
    if (start.tzinfo is None) != (end.tzinfo is None):
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        else:
            end = end.replace(tzinfo=timezone.utc)

    if end.tzinfo is not None:
        start = start.astimezone(end.tzinfo)

    # Clock skew can put last_reviewed after now
    return max((end.date() - start.date()).days, 0)


def is_due(word: Word, now: datetime) -> bool:
    """
    Check whether a word is due for review at `now`.

    Never-reviewed words are always due.
    """
    if word.last_reviewed is None:
        return True
    return whole_days_between(word.last_reviewed, now) >= interval_for(word.review_count)


def select_due(words: Iterable[Word], now: datetime) -> list[Word]:
    """
    Filter words down to those due for review, preserving input order.
    """
    return [word for word in words if is_due(word, now)]


def due_count(words: Iterable[Word], now: datetime) -> int:
    return sum(1 for word in words if is_due(word, now))


def filter_scope(words: Iterable[Word], scope: Scope = None) -> list[Word]:
    """
    Restrict words to a scope. None means every word.
    """
    if scope is None:
        return list(words)
    return [word for word in words if word.id in scope]


def select_for_mode(
    mode: ReviewMode,
    words: Iterable[Word],
    now: datetime,
    scope: Scope = None,
    forgotten: AbstractSet[UUID] = frozenset(),
) -> list[Word]:
    """
    Build the word list for a session in the given mode.

    - REVIEW_ALL: every word in scope
    - CONTINUE_LAST: words in scope that are not learned, plus words in
      scope already marked forgotten
    - RECOMMENDED_REVIEW: due words across the whole library; the sheet
      scope does not apply

    Args:
        mode: Review mode chosen for the session
        words: Library snapshot, in presentation order
        now: Current time
        scope: Optional set of word ids from the sheet picker
        forgotten: Word ids marked forgotten earlier in this session

    Returns:
        Words for the session queue
    """
    if mode == ReviewMode.RECOMMENDED_REVIEW:
        return select_due(words, now)

    scoped = filter_scope(words, scope)
    if mode == ReviewMode.REVIEW_ALL:
        return scoped
    if mode == ReviewMode.CONTINUE_LAST:
        return [word for word in scoped if not word.learned or word.id in forgotten]

    raise ValueError(f"Unknown review mode: {mode}")
