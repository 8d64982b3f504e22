"""
Deck schemas.
"""
from fastapi import Form
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class DeckResponse(BaseModel):
    """Deck response schema."""
    id: int
    user_id: int
    from_language: str
    to_language_primary: str
    to_language_secondary: Optional[str] = None
    design_key: Optional[str] = None
    seen_at: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DeckForm(BaseModel):
    """
    Form body for decks.

    On create, ``from_language`` and ``to_language_primary`` are required.
    On update, any subset of fields may be sent; unset fields are left alone.
    """
    from_language: Optional[str] = None
    to_language_primary: Optional[str] = None
    to_language_secondary: Optional[str] = None
    design_key: Optional[str] = None
    seen_at: Optional[datetime] = None

    @classmethod
    def as_form(
        cls,
        from_language: Optional[str] = Form(None, max_length=100),
        to_language_primary: Optional[str] = Form(None, max_length=100),
        to_language_secondary: Optional[str] = Form(None, max_length=100),
        design_key: Optional[str] = Form(None, max_length=100),
        seen_at: Optional[datetime] = Form(None),
    ) -> "DeckForm":
        return cls(
            from_language=from_language,
            to_language_primary=to_language_primary,
            to_language_secondary=to_language_secondary,
            design_key=design_key,
            seen_at=seen_at,
        )
