"""
Review session service.

A review session walks a deck's cards by index. When a session starts the
cards are ordered once (see ``order_review_queue``) and the ordered snapshot is
cached per deck, so every following request only has to look up an index.
"""
import logging
import math
import random
import threading
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sqlmodel import Session

from flashdeck.core.exceptions import ValidationError
from flashdeck.models import Card, Deck, Rating, CardSide
from flashdeck.schemas.card import CardResponse
from flashdeck.services.card_service import get_card, list_cards
from flashdeck.services.deck_service import touch_deck

logger = logging.getLogger(__name__)

# Weight tiers, highest first
WEIGHT_FAILED_SINCE_LAST_SESSION = 1_000_000
WEIGHT_PRIORITY = 100_000

# Number of age buckets between the youngest and the oldest card
AGE_BUCKETS = 4


def order_review_queue(
    cards: Sequence[Card],
    last_session_at: datetime,
    daily_review_count: int = 9
) -> List[Card]:
    """
    Order cards for a review session.

    Cards are first sorted youngest ``updated_at`` first, then weighted:

    1. rated AGAIN since the previous session started: 1,000,000
    2. unrated: 100,000
    3. youngest remaining cards, until ``daily_review_count`` cards carry a
       weight: 100,000
    4. everything else: ``rating + ceil(age / span * 4)``, where ``age`` is the
       distance to the youngest card and ``span`` the distance between the
       youngest and the oldest card

    Ties keep the youngest-first order.

    Args:
        cards: Cards of one deck (ORM rows or snapshots)
        last_session_at: The deck's ``seen_at`` before this session started
        daily_review_count: How many cards tiers 1-3 should fill up to

    Returns:
        A new list, the card to show first at index 0
    """
    by_age = sorted(cards, key=lambda c: c.updated_at, reverse=True)
    if not by_age:
        return []

    weights: Dict[int, int] = {}

    for card in by_age:
        if card.rating == Rating.AGAIN and card.updated_at > last_session_at:
            weights[card.id] = WEIGHT_FAILED_SINCE_LAST_SESSION
        elif card.rating == Rating.UNRATED:
            weights[card.id] = WEIGHT_PRIORITY

    youngest = by_age[0].updated_at
    span_ms = (youngest - by_age[-1].updated_at).total_seconds() * 1000

    for card in by_age:
        if card.id in weights:
            continue

        # Promoted cards keep the priority weight; only the rest get rating + age
        if len(weights) < daily_review_count:
            weights[card.id] = WEIGHT_PRIORITY
            continue

        age_ms = (youngest - card.updated_at).total_seconds() * 1000
        age_bucket = math.ceil(age_ms / span_ms * AGE_BUCKETS) if span_ms > 0 else 0
        weights[card.id] = card.rating + age_bucket

    return sorted(by_age, key=lambda c: weights[c.id], reverse=True)


class ActiveDeckCache:
    """Ordered card snapshots of the decks currently under review, keyed by deck id."""

    def __init__(self):
        self._decks: Dict[int, List[CardResponse]] = {}
        self._lock = threading.RLock()

    def put(self, deck_id: int, cards: List[CardResponse]) -> None:
        with self._lock:
            self._decks[deck_id] = cards

    def get(self, deck_id: int) -> Optional[List[CardResponse]]:
        with self._lock:
            return self._decks.get(deck_id)

    def card_at(self, deck_id: int, index: int) -> Optional[CardResponse]:
        with self._lock:
            cards = self._decks.get(deck_id)
            if cards is None or index < 0 or index >= len(cards):
                return None
            return cards[index]

    def discard(self, deck_id: int) -> None:
        with self._lock:
            self._decks.pop(deck_id, None)

    def clear(self) -> None:
        with self._lock:
            self._decks.clear()


active_decks = ActiveDeckCache()


def start_review_session(
    session: Session,
    deck: Deck,
    daily_review_count: int = 9,
    cache: ActiveDeckCache = active_decks
) -> List[CardResponse]:
    """
    Stamp the deck as seen, order its cards and cache the queue.

    Returns:
        The ordered queue that was cached
    """
    deck_id = deck.id
    last_session_at = touch_deck(session, deck)
    cards = list_cards(session, deck_id)

    queue = [
        CardResponse.model_validate(card)
        for card in order_review_queue(cards, last_session_at, daily_review_count)
    ]
    cache.put(deck_id, queue)

    logger.info(f"Started review session for deck {deck_id}: {len(queue)} card(s) queued")
    return queue


def pick_prompt_side(rng: random.Random = random) -> CardSide:
    """The side to quiz first: "from" two times out of three, "to" otherwise."""
    return CardSide.FROM if rng.randint(0, 2) > 0 else CardSide.TO


def record_rating(
    session: Session,
    deck_id: int,
    card_id: int,
    rating: int,
    seen_for: Optional[int] = None
) -> Card:
    """
    Persist one review of a card.

    Sets ``rating``, ``seen_at`` (now) and ``seen_for`` in a single UPDATE.
    When the rating differs from the stored one, the database copies the old
    value into ``prev_rating``.

    Raises:
        ValidationError: If rating is not 1-4 or seen_for is negative
        NotFoundError: If the card is not in the deck
    """
    if rating not in (Rating.EASY, Rating.GOOD, Rating.HARD, Rating.AGAIN):
        raise ValidationError(f"rating must be between 1 and 4, got {rating}")
    if seen_for is not None and seen_for < 0:
        raise ValidationError(f"seen_for must not be negative, got {seen_for}")

    card = get_card(session, deck_id, card_id)
    old_rating = card.rating

    card.rating = rating
    card.seen_at = datetime.utcnow()
    card.seen_for = seen_for
    session.add(card)
    session.commit()
    session.refresh(card)

    logger.info(
        f"Rated card {card_id} in deck {deck_id}: {old_rating} -> {rating} "
        f"(prev_rating={card.prev_rating}, seen_for={seen_for}ms)"
    )
    return card
