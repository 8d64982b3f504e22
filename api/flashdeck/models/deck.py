"""
Deck model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from flashdeck.models.user import User
    from flashdeck.models.card import Card


class Deck(SQLModel, table=True):
    """Deck table - a user's collection of cards for one language pair."""
    __tablename__ = "decks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    from_language: str = Field(max_length=100)
    to_language_primary: str = Field(max_length=100)
    to_language_secondary: Optional[str] = Field(default=None, max_length=100)
    design_key: Optional[str] = Field(default=None, max_length=100)  # Visual theme of the deck
    seen_at: datetime = Field(default_factory=datetime.utcnow)  # Start of the last review session
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)  # Maintained by update_decks_modtime

    # Relationships
    user: "User" = Relationship(back_populates="decks")
    cards: List["Card"] = Relationship(back_populates="deck")
