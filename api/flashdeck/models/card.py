"""
Card model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import CheckConstraint, Column, Integer, JSON
from sqlalchemy.dialects import postgresql
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from flashdeck.models.deck import Deck

# INT[] on PostgreSQL, a JSON list everywhere else
IntegerList = JSON().with_variant(postgresql.ARRAY(Integer), "postgresql")


class Card(SQLModel, table=True):
    """Card table - one review item with its current and previous rating."""
    __tablename__ = "cards"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 0 AND 4", name="ck_cards_rating_range"),
        CheckConstraint("prev_rating BETWEEN 0 AND 4", name="ck_cards_prev_rating_range"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    deck_id: int = Field(foreign_key="decks.id", index=True)
    related_card_ids: List[int] = Field(
        default_factory=list,
        sa_column=Column(IntegerList, nullable=False),
    )
    from_text: str = Field(max_length=100)
    to_text_primary: str = Field(max_length=100)
    to_text_secondary: Optional[str] = Field(default=None, max_length=100)
    example_text: Optional[str] = Field(default=None, max_length=255)
    audio_url: Optional[str] = Field(default=None, max_length=255)
    seen_at: datetime = Field(default_factory=datetime.utcnow)
    seen_for: Optional[int] = None  # Milliseconds the card was on screen, measured by the client
    rating: int = Field(default=0)
    prev_rating: int = Field(default=0)  # Written by update_cards_rating, never by the app
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)  # Maintained by update_cards_modtime

    # Relationships
    deck: "Deck" = Relationship(back_populates="cards")
