"""
Card endpoints. The deck in the path must belong to the active user.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from flashdeck.api.deps import get_active_user
from flashdeck.core.database import get_session
from flashdeck.models import User
from flashdeck.schemas.card import CardForm, CardResponse
from flashdeck.schemas.common import ApiResponse, DatabaseQueryResult
from flashdeck.services import card_service
from flashdeck.services.deck_service import get_deck

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("/{deck_id}", response_model=ApiResponse[List[CardResponse]])
async def get_cards(
    deck_id: int,
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    get_deck(session, deck_id, user.id)
    cards = card_service.list_cards(session, deck_id)
    return ApiResponse(data=[CardResponse.model_validate(c) for c in cards])


@router.get("/{deck_id}/{card_id}", response_model=ApiResponse[CardResponse])
async def get_card(
    deck_id: int,
    card_id: int,
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    get_deck(session, deck_id, user.id)
    card = card_service.get_card(session, deck_id, card_id)
    return ApiResponse(data=CardResponse.model_validate(card))


@router.post("/{deck_id}", response_model=ApiResponse[DatabaseQueryResult], status_code=status.HTTP_201_CREATED)
async def post_card(
    deck_id: int,
    card_form: CardForm = Depends(CardForm.as_form),
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    get_deck(session, deck_id, user.id)
    return ApiResponse(data=card_service.create_card(session, deck_id, card_form))


@router.put("/{deck_id}/{card_id}", response_model=ApiResponse[DatabaseQueryResult])
async def put_card(
    deck_id: int,
    card_id: int,
    card_form: CardForm = Depends(CardForm.as_form),
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    """
    Update the fields present in the form.

    Sending a new ``rating`` (0-4) shifts the stored rating into ``prev_rating``.
    """
    get_deck(session, deck_id, user.id)
    return ApiResponse(data=card_service.update_card(session, deck_id, card_id, card_form))


@router.delete("/{deck_id}/{card_id}", response_model=ApiResponse[DatabaseQueryResult])
async def delete_card(
    deck_id: int,
    card_id: int,
    user: User = Depends(get_active_user),
    session: Session = Depends(get_session)
):
    get_deck(session, deck_id, user.id)
    return ApiResponse(data=card_service.delete_card(session, deck_id, card_id))
