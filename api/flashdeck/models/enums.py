"""
Model enums.
"""
from enum import Enum, IntEnum


class Rating(IntEnum):
    """Self-reported recall score. Higher means the card was harder to recall."""
    UNRATED = 0
    EASY = 1
    GOOD = 2
    HARD = 3
    AGAIN = 4


class CardSide(str, Enum):
    """Side of a card shown during review."""
    FROM = "from"
    TO = "to"


RATING_LABELS = {
    Rating.EASY: "Easy",
    Rating.GOOD: "Good",
    Rating.HARD: "Hard",
    Rating.AGAIN: "Again",
}
