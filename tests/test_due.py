from datetime import datetime, timedelta, timezone

import pytest

from conftest import NOW, make_word, reviewed
from vocab.review import (
    INTERVAL_DAYS,
    ReviewMode,
    due_count,
    interval_for,
    is_due,
    select_due,
    select_for_mode,
    whole_days_between,
)


def test_interval_table_values():
    assert [interval_for(n) for n in range(6)] == [0, 1, 3, 7, 15, 30]


@pytest.mark.parametrize("review_count", [6, 7, 20, 500])
def test_interval_repeats_thirty_days_after_table(review_count):
    assert interval_for(review_count) == 30


def test_never_reviewed_word_is_always_due():
    word = make_word("apple", review_count=4)
    assert is_due(word, NOW)
    assert is_due(word, NOW - timedelta(days=365))


@pytest.mark.parametrize("review_count", range(len(INTERVAL_DAYS)))
def test_due_boundary_is_exact(review_count):
    interval = INTERVAL_DAYS[review_count]
    if interval > 0:
        assert not is_due(reviewed("x", review_count, interval - 1), NOW)
    assert is_due(reviewed("x", review_count, interval), NOW)


def test_high_review_count_uses_thirty_days():
    assert not is_due(reviewed("x", 9, 29), NOW)
    assert is_due(reviewed("x", 9, 30), NOW)
    assert is_due(reviewed("x", 9, 61), NOW)


def test_days_are_counted_by_calendar_date():
    late = datetime(2026, 3, 9, 23, 0, tzinfo=timezone.utc)
    early = datetime(2026, 3, 10, 0, 30, tzinfo=timezone.utc)
    assert whole_days_between(late, early) == 1

    same_day_start = datetime(2026, 3, 10, 0, 1, tzinfo=timezone.utc)
    same_day_end = datetime(2026, 3, 10, 23, 59, tzinfo=timezone.utc)
    assert whole_days_between(same_day_start, same_day_end) == 0


def test_days_use_the_clock_timezone():
    tokyo = timezone(timedelta(hours=9))
    # 16:00 UTC on the 9th is 01:00 on the 10th in Tokyo
    last = datetime(2026, 3, 9, 16, 0, tzinfo=timezone.utc)
    now = datetime(2026, 3, 10, 20, 0, tzinfo=tokyo)
    assert whole_days_between(last, now) == 0


def test_future_last_review_counts_as_zero_days():
    assert whole_days_between(NOW + timedelta(days=2), NOW) == 0


def test_word_reviewed_late_yesterday_is_due_after_one_review():
    word = make_word(
        "bicycle",
        review_count=1,
        last_reviewed=datetime(2026, 3, 9, 23, 0, tzinfo=timezone.utc),
    )
    assert is_due(word, datetime(2026, 3, 10, 0, 30, tzinfo=timezone.utc))


def test_select_due_keeps_order_and_handles_empty():
    words = [
        make_word("a"),
        reviewed("b", 3, 2),
        reviewed("c", 1, 1),
        reviewed("d", 0, 0),
    ]
    assert [w.term for w in select_due(words, NOW)] == ["a", "c", "d"]
    assert select_due([], NOW) == []
    assert due_count(words, NOW) == 3


def test_select_due_is_pure():
    word = reviewed("b", 2, 5)
    before = word.model_copy()
    select_due([word], NOW)
    assert word == before


def test_review_all_selects_every_word_in_scope():
    words = [make_word("a", learned=True), make_word("b"), reviewed("c", 5, 1)]
    assert select_for_mode(ReviewMode.REVIEW_ALL, words, NOW) == words

    scope = {words[0].id, words[2].id}
    selected = select_for_mode(ReviewMode.REVIEW_ALL, words, NOW, scope=scope)
    assert [w.term for w in selected] == ["a", "c"]


def test_continue_last_selects_unlearned_and_forgotten():
    words = [make_word("a", learned=True), make_word("b"), make_word("c", learned=True)]
    selected = select_for_mode(
        ReviewMode.CONTINUE_LAST, words, NOW, forgotten={words[2].id}
    )
    assert [w.term for w in selected] == ["b", "c"]


def test_recommended_review_ignores_sheet_scope():
    words = [make_word("a"), reviewed("b", 2, 1), make_word("c")]
    selected = select_for_mode(
        ReviewMode.RECOMMENDED_REVIEW, words, NOW, scope={words[0].id}
    )
    assert [w.term for w in selected] == ["a", "c"]


def test_naive_last_reviewed_is_read_as_utc():
    word = make_word(
        "cheese",
        review_count=1,
        last_reviewed=datetime(2026, 3, 9, 12, 0),
    )
    assert is_due(word, NOW)
