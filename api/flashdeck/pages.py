"""
Server-rendered review pages.

Pages return HTML fragments meant to be swapped in by htmx. Navigation
carries the session token as ``?uuid=`` so the forms on each page can call
the JSON API.
"""
# pyright: reportAttributeAccessIssue=false
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from flashdeck.api.deps import is_valid_session_token, require_session_token
from flashdeck.core.config import settings
from flashdeck.core.database import get_session
from flashdeck.core.exceptions import NotFoundError
from flashdeck.models import Card, CardSide, Deck, RATING_LABELS, User
from flashdeck.schemas.card import CardResponse, RatingForm
from flashdeck.services.card_service import get_card
from flashdeck.services.deck_service import get_deck, list_decks
from flashdeck.services.review_service import (
    active_decks,
    pick_prompt_side,
    record_rating,
    start_review_session,
)

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(tags=["pages"], default_response_class=HTMLResponse)

# Timestamp shown on placeholder rows
EPOCH = datetime(2016, 7, 8, 9, 10, 11)


def end_of_deck_card(deck_id: int) -> CardResponse:
    """Terminal card rendered once the index runs past the queue."""
    return CardResponse(
        id=0,
        deck_id=deck_id,
        from_text="The End",
        to_text_primary="The End",
        seen_at=EPOCH,
        rating=0,
        prev_rating=0,
        created_at=EPOCH,
        updated_at=EPOCH,
    )


def not_found_deck() -> Deck:
    return Deck(
        id=0,
        user_id=0,
        from_language="Not found",
        to_language_primary="Not found",
        seen_at=EPOCH,
        created_at=EPOCH,
        updated_at=EPOCH,
    )


def not_found_card() -> Card:
    return Card(
        id=0,
        deck_id=0,
        from_text="Not found",
        to_text_primary="Not found",
        seen_at=EPOCH,
        created_at=EPOCH,
        updated_at=EPOCH,
    )


def _active_user(session: Session) -> Optional[User]:
    return session.get(User, settings.active_user_id)


@router.get("/")
async def page_home(
    request: Request,
    uuid: Optional[str] = Query(None),
    session: Session = Depends(get_session)
):
    """Deck overview. Renders an empty list unless the session token is valid."""
    user = _active_user(session)
    decks = []
    if user is not None and is_valid_session_token(uuid):
        decks = list_decks(session, user.id)

    return templates.TemplateResponse(
        request=request,
        name="home.html",
        context={"decks": decks, "uuid": uuid or ""},
    )


@router.get("/action/{deck_id}/{card_index}/{card_side}")
async def page_action(
    request: Request,
    deck_id: int,
    card_index: int,
    card_side: CardSide,
    uuid: Optional[str] = Query(None),
    shown_at: Optional[int] = Query(None, ge=0),
    session: Session = Depends(get_session)
):
    """
    Show the card at ``card_index`` of the deck's review queue.

    Opening index 0 on the "from" side starts a new session: the deck is
    stamped as seen and its cards are re-ordered. An index past the end of
    the queue renders "The End".

    ``shown_at`` (client epoch milliseconds) is set by the prompt side on its
    "Show" link, so the answer side can time the whole card for ``seen_for``.
    """
    user = _active_user(session)
    starts_session = card_index == 0 and card_side == CardSide.FROM

    if user is not None and (starts_session or active_decks.get(deck_id) is None):
        try:
            deck = get_deck(session, deck_id, user.id)
            start_review_session(session, deck, settings.daily_review_count)
        except NotFoundError:
            logger.warning(f"Review requested for unknown deck {deck_id}")

    queue = active_decks.get(deck_id) or []
    card = active_decks.card_at(deck_id, card_index)

    if card is None:
        context = {
            "card": end_of_deck_card(deck_id),
            "num_cards": 0,
            "deck_id": deck_id,
            "index": 0,
            "side": CardSide.FROM.value,
            "random": CardSide.FROM.value,
            "uuid": uuid or "",
            "shown_at": None,
            "rating_labels": RATING_LABELS,
            "finished": True,
        }
    else:
        context = {
            "card": card,
            "num_cards": len(queue),
            "deck_id": deck_id,
            "index": card_index,
            "side": card_side.value,
            "random": pick_prompt_side().value,
            "uuid": uuid or "",
            "shown_at": shown_at,
            "rating_labels": RATING_LABELS,
            "finished": False,
        }

    return templates.TemplateResponse(request=request, name="action.html", context=context)


@router.post("/rate/{deck_id}/{card_id}/{card_index}")
async def page_rate(
    deck_id: int,
    card_id: int,
    card_index: int,
    rating_form: RatingForm = Depends(RatingForm.as_form),
    uuid: str = Depends(require_session_token),
    session: Session = Depends(get_session)
):
    """Persist a rating, then move on to the next card of the queue."""
    user = _active_user(session)
    if user is None:
        raise NotFoundError(f"Deck with id {deck_id} not found")
    get_deck(session, deck_id, user.id)

    record_rating(session, deck_id, card_id, rating_form.rating, rating_form.seen_for)

    next_url = f"/action/{deck_id}/{card_index + 1}/{CardSide.FROM.value}?uuid={uuid}"
    return RedirectResponse(url=next_url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/add_card/{deck_id}/{card_index}")
async def page_add_card(
    request: Request,
    deck_id: int,
    card_index: int,
    uuid: Optional[str] = Query(None),
    session: Session = Depends(get_session)
):
    user = _active_user(session)
    deck = None
    if user is not None:
        try:
            deck = get_deck(session, deck_id, user.id)
        except NotFoundError:
            deck = None

    return templates.TemplateResponse(
        request=request,
        name="add_card.html",
        context={"deck": deck or not_found_deck(), "card_index": card_index, "uuid": uuid or ""},
    )


@router.get("/edit_card/{deck_id}/{card_id}/{card_index}")
async def page_edit_card(
    request: Request,
    deck_id: int,
    card_id: int,
    card_index: int,
    uuid: Optional[str] = Query(None),
    session: Session = Depends(get_session)
):
    """Edit form for one card. Renders "Not found" placeholders on any failure."""
    deck, card = not_found_deck(), not_found_card()
    user = _active_user(session)

    if user is not None and is_valid_session_token(uuid):
        try:
            deck = get_deck(session, deck_id, user.id)
            card = get_card(session, deck_id, card_id)
        except NotFoundError:
            deck, card = not_found_deck(), not_found_card()

    return templates.TemplateResponse(
        request=request,
        name="edit_card.html",
        context={"deck": deck, "card": card, "card_index": card_index, "uuid": uuid or ""},
    )
