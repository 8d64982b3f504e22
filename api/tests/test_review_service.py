"""
Review sessions against the database: starting a session and rating cards.
"""
from datetime import datetime, timedelta

import pytest

from conftest import add_card, tick
from flashdeck.core.exceptions import NotFoundError, ValidationError
from flashdeck.models import Card, Deck, Rating
from flashdeck.services.review_service import (
    ActiveDeckCache,
    record_rating,
    start_review_session,
)


class TestStartReviewSession:

    def test_orders_and_caches_the_deck(self, session, deck_id):
        now = datetime.utcnow()
        old = add_card(deck_id, from_text="alt", rating=Rating.GOOD, updated_at=now - timedelta(days=3))
        new = add_card(deck_id, from_text="neu", rating=Rating.GOOD, updated_at=now - timedelta(hours=1))
        unrated = add_card(deck_id, from_text="leer", updated_at=now - timedelta(days=5))

        cache = ActiveDeckCache()
        deck = session.get(Deck, deck_id)
        queue = start_review_session(session, deck, daily_review_count=0, cache=cache)

        assert [c.id for c in queue] == [unrated, old, new]
        assert cache.get(deck_id) == queue
        assert cache.card_at(deck_id, 0).from_text == "leer"

    def test_stamps_deck_as_seen(self, session, deck_id):
        deck = session.get(Deck, deck_id)
        before = deck.seen_at
        tick()

        start_review_session(session, deck, cache=ActiveDeckCache())

        session.expire_all()
        assert session.get(Deck, deck_id).seen_at > before

    def test_failed_since_last_session_comes_first(self, session, deck_id):
        add_card(deck_id, from_text="a", rating=Rating.EASY)
        add_card(deck_id, from_text="b", rating=0)
        cache = ActiveDeckCache()
        start_review_session(session, session.get(Deck, deck_id), cache=cache)

        tick()
        failed = add_card(deck_id, from_text="c", rating=Rating.GOOD)
        record_rating(session, deck_id, failed, Rating.AGAIN)

        session.expire_all()
        queue = start_review_session(session, session.get(Deck, deck_id), cache=cache)
        assert queue[0].id == failed

    def test_empty_deck(self, session, deck_id):
        cache = ActiveDeckCache()
        queue = start_review_session(session, session.get(Deck, deck_id), cache=cache)

        assert queue == []
        assert cache.card_at(deck_id, 0) is None


class TestRecordRating:

    def test_sets_rating_seen_at_and_seen_for(self, session, deck_id):
        card_id = add_card(deck_id)
        before = session.get(Card, card_id).seen_at
        tick()

        card = record_rating(session, deck_id, card_id, Rating.HARD, seen_for=4200)

        assert card.rating == Rating.HARD
        assert card.prev_rating == Rating.UNRATED
        assert card.seen_for == 4200
        assert card.seen_at > before

    def test_second_rating_keeps_history(self, session, deck_id):
        card_id = add_card(deck_id)

        record_rating(session, deck_id, card_id, Rating.AGAIN)
        card = record_rating(session, deck_id, card_id, Rating.GOOD)

        assert (card.rating, card.prev_rating) == (Rating.GOOD, Rating.AGAIN)

    def test_same_rating_keeps_prev_rating(self, session, deck_id):
        card_id = add_card(deck_id)

        record_rating(session, deck_id, card_id, Rating.EASY)
        card = record_rating(session, deck_id, card_id, Rating.EASY)

        assert (card.rating, card.prev_rating) == (Rating.EASY, Rating.UNRATED)

    @pytest.mark.parametrize("rating", [0, 5, -1])
    def test_rejects_out_of_range_rating(self, session, deck_id, rating):
        card_id = add_card(deck_id)

        with pytest.raises(ValidationError):
            record_rating(session, deck_id, card_id, rating)

        assert session.get(Card, card_id).rating == Rating.UNRATED

    def test_rejects_negative_seen_for(self, session, deck_id):
        card_id = add_card(deck_id)

        with pytest.raises(ValidationError):
            record_rating(session, deck_id, card_id, Rating.GOOD, seen_for=-1)

    def test_card_must_be_in_deck(self, session, deck_id):
        with pytest.raises(NotFoundError):
            record_rating(session, deck_id, 999, Rating.GOOD)
