from datetime import datetime, timedelta, timezone

import pytest

from vocab.errors import StoreError
from vocab.schemas import Word
from vocab.store import WordStore


NOW = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


def make_word(term, **fields):
    return Word(term=term, definition=f"{term} (def)", **fields)


def reviewed(term, review_count, days_ago, now=NOW, **fields):
    return make_word(
        term,
        review_count=review_count,
        last_reviewed=now - timedelta(days=days_ago),
        **fields,
    )


class FakeStore:
    """In-memory stand-in for WordStore that can be told to fail saves."""

    def __init__(self, words=()):
        self.words = list(words)
        self.fail_saves = False
        self.saved = []

    def list_words(self):
        return list(self.words)

    def save_words(self, words):
        if self.fail_saves:
            raise StoreError("disk full")
        self.saved.append([(w.id, w.learned, w.review_count, w.last_reviewed) for w in words])
        return len(words)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def store():
    return WordStore.from_url("sqlite://")
