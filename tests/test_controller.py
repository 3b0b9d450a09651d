from uuid import uuid4

import pytest

from conftest import NOW, FakeStore, make_word
from vocab.errors import StoreError
from vocab.review import ReviewController, ReviewMode, SessionState


@pytest.fixture
def words():
    return [make_word("a"), make_word("b")]


@pytest.fixture
def fake_store(words):
    return FakeStore(words)


@pytest.fixture
def controller(fake_store, clock):
    controller = ReviewController(fake_store, clock=clock)
    controller.enter()
    return controller


def test_submit_persists_each_verdict(controller, fake_store, words):
    controller.start(ReviewMode.REVIEW_ALL)

    outcome = controller.submit(words[0].id, remembered=True)

    assert outcome.accepted and outcome.saved
    assert not outcome.round_complete
    assert fake_store.saved == [[(words[0].id, True, 1, NOW)]]
    assert controller.pending_saves == 0


def test_failed_save_is_reported_but_not_rolled_back(controller, fake_store, words):
    controller.start(ReviewMode.REVIEW_ALL)
    fake_store.fail_saves = True

    outcome = controller.submit(words[0].id, remembered=False)

    assert outcome.accepted
    assert not outcome.saved
    assert "disk full" in outcome.error
    assert controller.current() is words[1]
    assert words[0].review_count == 1
    assert controller.pending_saves == 1


def test_next_verdict_retries_outstanding_saves(controller, fake_store, words):
    controller.start(ReviewMode.REVIEW_ALL)
    fake_store.fail_saves = True
    controller.submit(words[0].id, remembered=True)

    fake_store.fail_saves = False
    outcome = controller.submit(words[1].id, remembered=True)

    assert outcome.saved
    assert outcome.round_complete
    saved_ids = {entry[0] for entry in fake_store.saved[-1]}
    assert saved_ids == {words[0].id, words[1].id}
    assert controller.pending_saves == 0


def test_stale_verdict_is_not_saved(controller, fake_store):
    controller.start(ReviewMode.REVIEW_ALL)

    outcome = controller.submit(uuid4(), remembered=True)

    assert not outcome.accepted
    assert fake_store.saved == []


def test_round_complete_offers_replay_in_continue_last(controller, words):
    controller.start(ReviewMode.CONTINUE_LAST)
    controller.submit(words[0].id, remembered=False)
    outcome = controller.submit(words[1].id, remembered=True)

    assert outcome.round_complete
    assert outcome.offer_replay

    replay = controller.replay()
    assert replay == [words[0]]
    assert controller.session.state == SessionState.PRESENTING


def test_enter_resets_session(controller, words):
    controller.start(ReviewMode.REVIEW_ALL)
    controller.enter()

    assert controller.current() is None
    assert controller.session.mode is None


def test_flush_without_pending_is_noop(controller, fake_store):
    assert controller.flush() is None
    assert fake_store.saved == []


def failing_saves(store, monkeypatch, failures):
    """Make the first `failures` save_words calls on a real store raise."""
    save_words = store.save_words
    calls = {"n": 0}

    def flaky(words):
        calls["n"] += 1
        if calls["n"] <= failures:
            raise StoreError("database is locked")
        return save_words(words)

    monkeypatch.setattr(store, "save_words", flaky)
    return calls


def test_replay_after_failed_save_keeps_review_count(store, clock, monkeypatch):
    word = store.add_word(make_word("a"))
    failing_saves(store, monkeypatch, failures=1)
    controller = ReviewController(store, clock=clock)
    controller.enter()

    controller.start(ReviewMode.CONTINUE_LAST)
    outcome = controller.submit(word.id, remembered=False)
    assert not outcome.saved and outcome.offer_replay

    [replayed] = controller.replay()
    assert replayed.review_count == 1
    outcome = controller.submit(word.id, remembered=False)

    assert outcome.saved
    assert controller.pending_saves == 0
    assert store.get_word(word.id).review_count == 2


def test_replay_uses_unsaved_words_while_store_is_down(store, clock, monkeypatch):
    word = store.add_word(make_word("a"))
    calls = failing_saves(store, monkeypatch, failures=2)
    controller = ReviewController(store, clock=clock)
    controller.enter()

    controller.start(ReviewMode.CONTINUE_LAST)
    controller.submit(word.id, remembered=False)
    [replayed] = controller.replay()

    assert calls["n"] == 2
    assert controller.pending_saves == 1
    assert replayed.review_count == 1

    outcome = controller.submit(word.id, remembered=True)

    assert outcome.saved
    saved = store.get_word(word.id)
    assert saved.review_count == 2
    assert saved.learned


def test_deleting_a_queued_word_does_not_break_saves(store, clock):
    for term in ("a", "b", "c"):
        store.add_word(make_word(term))
    controller = ReviewController(store, clock=clock)
    controller.enter()
    controller.start(ReviewMode.REVIEW_ALL)

    front = controller.current()
    assert store.delete_word(front.id)
    outcome = controller.submit(front.id, remembered=True)

    assert outcome.accepted and outcome.saved
    assert controller.pending_saves == 0
    assert store.get_word(front.id) is None

    nxt = controller.current()
    outcome = controller.submit(nxt.id, remembered=True)

    assert outcome.saved
    remaining = {w.term: w for w in store.list_words()}
    assert front.term not in remaining
    assert remaining[nxt.term].review_count == 1
    assert len(remaining) == 2
