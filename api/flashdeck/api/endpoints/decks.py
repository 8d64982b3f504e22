"""
Deck endpoints, scoped to the active user.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from flashdeck.api.deps import get_active_user
from flashdeck.core.database import get_session
from flashdeck.models import User
from flashdeck.schemas.common import ApiResponse, DatabaseQueryResult
from flashdeck.schemas.deck import DeckForm, DeckResponse
from flashdeck.services import deck_service
from flashdeck.services.review_service import active_decks

router = APIRouter(prefix="/decks", tags=["decks"])


@router.get("", response_model=ApiResponse[List[DeckResponse]])
async def get_decks(
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    decks = deck_service.list_decks(session, user.id)
    return ApiResponse(data=[DeckResponse.model_validate(d) for d in decks])


@router.get("/{deck_id}", response_model=ApiResponse[DeckResponse])
async def get_deck(
    deck_id: int,
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    deck = deck_service.get_deck(session, deck_id, user.id)
    return ApiResponse(data=DeckResponse.model_validate(deck))


@router.post("", response_model=ApiResponse[DatabaseQueryResult], status_code=status.HTTP_201_CREATED)
async def post_deck(
    deck_form: DeckForm = Depends(DeckForm.as_form),
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    return ApiResponse(data=deck_service.create_deck(session, deck_form, user.id))


@router.put("/{deck_id}", response_model=ApiResponse[DatabaseQueryResult])
async def put_deck(
    deck_id: int,
    deck_form: DeckForm = Depends(DeckForm.as_form),
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    return ApiResponse(data=deck_service.update_deck(session, deck_id, deck_form, user.id))


@router.delete("/{deck_id}", response_model=ApiResponse[DatabaseQueryResult])
async def delete_deck(
    deck_id: int,
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    """Delete a deck. Fails with 409 while the deck still has cards."""
    result = deck_service.delete_deck(session, deck_id, user.id)
    active_decks.discard(deck_id)
    return ApiResponse(data=result)
