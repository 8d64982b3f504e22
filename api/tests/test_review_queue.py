"""
Review queue ordering and the per-deck cache.
"""
from datetime import datetime, timedelta
from types import SimpleNamespace

from flashdeck.models import CardSide
from flashdeck.services.review_service import (
    ActiveDeckCache,
    order_review_queue,
    pick_prompt_side,
)

NOW = datetime(2024, 1, 10, 12, 0, 0)
LAST_SESSION = NOW - timedelta(days=1)


def card(card_id, rating, age):
    return SimpleNamespace(id=card_id, rating=rating, updated_at=NOW - age)


def ids(cards):
    return [c.id for c in cards]


def test_empty_deck_gives_empty_queue():
    assert order_review_queue([], LAST_SESSION) == []


def test_weight_tiers():
    cards = [
        card(3, rating=1, age=timedelta(hours=1)),     # 1 + ceil(1/96 * 4) = 2
        card(4, rating=3, age=timedelta(days=2)),      # 3 + ceil(48/96 * 4) = 5
        card(5, rating=2, age=timedelta(days=4)),      # 2 + 4 = 6, the oldest card
        card(6, rating=4, age=timedelta(days=3)),      # rated before the last session: 4 + 3 = 7
        card(2, rating=0, age=timedelta(days=2)),      # unrated
        card(1, rating=4, age=timedelta(0)),           # failed since the last session
    ]

    queue = order_review_queue(cards, LAST_SESSION, daily_review_count=2)

    assert ids(queue) == [1, 2, 6, 5, 4, 3]


def test_youngest_cards_fill_up_to_daily_review_count():
    cards = [card(i, rating=2, age=timedelta(hours=i)) for i in range(1, 6)]

    queue = order_review_queue(cards, LAST_SESSION, daily_review_count=3)

    # Three youngest are promoted; the rest fall back to rating + age bucket
    assert ids(queue)[:3] == [1, 2, 3]
    assert ids(queue)[3:] == [5, 4]


def test_whole_small_deck_is_promoted_youngest_first():
    cards = [
        card(1, rating=3, age=timedelta(days=3)),
        card(2, rating=1, age=timedelta(days=1)),
        card(3, rating=2, age=timedelta(days=2)),
    ]

    queue = order_review_queue(cards, LAST_SESSION)

    assert ids(queue) == [2, 3, 1]


def test_zero_span_falls_back_to_rating():
    cards = [
        card(1, rating=1, age=timedelta(0)),
        card(2, rating=3, age=timedelta(0)),
        card(3, rating=2, age=timedelta(0)),
    ]

    queue = order_review_queue(cards, LAST_SESSION, daily_review_count=0)

    assert ids(queue) == [2, 3, 1]


def test_again_before_last_session_is_not_top_tier():
    cards = [
        card(1, rating=0, age=timedelta(hours=1)),
        card(2, rating=4, age=timedelta(days=2)),
        card(3, rating=4, age=timedelta(hours=2)),
    ]

    queue = order_review_queue(cards, LAST_SESSION, daily_review_count=0)

    assert ids(queue) == [3, 1, 2]


def test_input_is_not_mutated():
    cards = [card(1, rating=1, age=timedelta(days=1)), card(2, rating=0, age=timedelta(0))]
    original = list(cards)

    order_review_queue(cards, LAST_SESSION)

    assert cards == original


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def randint(self, a, b):
        assert (a, b) == (0, 2)
        return self.value


def test_prompt_side_is_from_two_times_out_of_three():
    assert pick_prompt_side(FixedRandom(0)) == CardSide.TO
    assert pick_prompt_side(FixedRandom(1)) == CardSide.FROM
    assert pick_prompt_side(FixedRandom(2)) == CardSide.FROM


class TestActiveDeckCache:

    def test_card_at_bounds(self):
        cache = ActiveDeckCache()
        cache.put(7, ["a", "b"])

        assert cache.card_at(7, 0) == "a"
        assert cache.card_at(7, 1) == "b"
        assert cache.card_at(7, 2) is None
        assert cache.card_at(7, -1) is None
        assert cache.card_at(8, 0) is None

    def test_discard_and_clear(self):
        cache = ActiveDeckCache()
        cache.put(1, ["a"])
        cache.put(2, ["b"])

        cache.discard(1)
        assert cache.get(1) is None
        assert cache.get(2) == ["b"]

        cache.clear()
        assert cache.get(2) is None
