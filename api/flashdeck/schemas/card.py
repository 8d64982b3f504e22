"""
Card schemas.
"""
from fastapi import Form
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class CardResponse(BaseModel):
    """Card response schema. Also used as the cached snapshot in review queues."""
    id: int
    deck_id: int
    related_card_ids: List[int] = []
    from_text: str
    to_text_primary: str
    to_text_secondary: Optional[str] = None
    example_text: Optional[str] = None
    audio_url: Optional[str] = None
    seen_at: datetime
    seen_for: Optional[int] = None
    rating: int
    prev_rating: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CardForm(BaseModel):
    """
    Form body for cards.

    On create, ``from_text`` and ``to_text_primary`` are required. ``prev_rating``
    is not accepted; the database derives it from ``rating``.
    """
    related_card_ids: Optional[List[int]] = None
    from_text: Optional[str] = None
    to_text_primary: Optional[str] = None
    to_text_secondary: Optional[str] = None
    example_text: Optional[str] = None
    audio_url: Optional[str] = None
    seen_at: Optional[datetime] = None
    seen_for: Optional[int] = None
    rating: Optional[int] = None

    @classmethod
    def as_form(
        cls,
        related_card_ids: Optional[List[int]] = Form(None),
        from_text: Optional[str] = Form(None, max_length=100),
        to_text_primary: Optional[str] = Form(None, max_length=100),
        to_text_secondary: Optional[str] = Form(None, max_length=100),
        example_text: Optional[str] = Form(None, max_length=255),
        audio_url: Optional[str] = Form(None, max_length=255),
        seen_at: Optional[datetime] = Form(None),
        seen_for: Optional[int] = Form(None, ge=0),
        rating: Optional[int] = Form(None, ge=0, le=4),
    ) -> "CardForm":
        return cls(
            related_card_ids=related_card_ids,
            from_text=from_text,
            to_text_primary=to_text_primary,
            to_text_secondary=to_text_secondary,
            example_text=example_text,
            audio_url=audio_url,
            seen_at=seen_at,
            seen_for=seen_for,
            rating=rating,
        )


class RatingForm(BaseModel):
    """Form body posted from the review page."""
    rating: int
    seen_for: Optional[int] = None

    @classmethod
    def as_form(
        cls,
        rating: int = Form(..., ge=1, le=4),
        seen_for: Optional[int] = Form(None, ge=0),
    ) -> "RatingForm":
        return cls(rating=rating, seen_for=seen_for)
