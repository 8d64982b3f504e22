"""
Models package - imports all models so they register with SQLModel.metadata.
"""
from flashdeck.models.enums import Rating, CardSide, RATING_LABELS
from flashdeck.models.user import User
from flashdeck.models.deck import Deck
from flashdeck.models.card import Card
from flashdeck.models.triggers import attach_triggers

for _model in (User, Deck, Card):
    attach_triggers(_model.__table__)

__all__ = [
    'Rating',
    'CardSide',
    'RATING_LABELS',
    'User',
    'Deck',
    'Card',
]
