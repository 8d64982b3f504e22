"""
Card service for CRUD on the cards of a deck.
"""
import logging
from sqlmodel import Session, select
from sqlalchemy import update, delete
from sqlalchemy.exc import IntegrityError
from typing import List

from flashdeck.core.exceptions import ConflictError, NotFoundError, ValidationError
from flashdeck.models import Card
from flashdeck.schemas.card import CardForm
from flashdeck.schemas.common import DatabaseQueryResult

logger = logging.getLogger(__name__)


def list_cards(session: Session, deck_id: int) -> List[Card]:
    return list(session.exec(select(Card).where(Card.deck_id == deck_id).order_by(Card.id)).all())


def get_card(session: Session, deck_id: int, card_id: int) -> Card:
    card = session.exec(
        select(Card).where(Card.id == card_id, Card.deck_id == deck_id)
    ).first()
    if not card:
        raise NotFoundError(f"Card with id {card_id} not found in deck {deck_id}")
    return card


def create_card(session: Session, deck_id: int, card_form: CardForm) -> DatabaseQueryResult:
    """Insert an unrated card (rating and prev_rating start at 0)."""
    if card_form.from_text is None:
        raise ValidationError("from_text is required")
    if card_form.to_text_primary is None:
        raise ValidationError("to_text_primary is required")

    card = Card(
        deck_id=deck_id,
        related_card_ids=card_form.related_card_ids or [],
        from_text=card_form.from_text,
        to_text_primary=card_form.to_text_primary,
        to_text_secondary=card_form.to_text_secondary,
        example_text=card_form.example_text,
        audio_url=card_form.audio_url,
    )
    session.add(card)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(f"Deck {deck_id} does not exist") from e

    logger.info(f"Created card {card.id} in deck {deck_id}")
    return DatabaseQueryResult(rows_affected=1)


def update_card(
    session: Session,
    deck_id: int,
    card_id: int,
    card_form: CardForm
) -> DatabaseQueryResult:
    """
    Apply the fields present in the form.

    Changing ``rating`` moves the stored rating into ``prev_rating``; the
    update_cards_rating trigger does that, not this function.
    """
    values = card_form.model_dump(exclude_none=True)
    if not values:
        raise ValidationError("No fields to update")

    try:
        result = session.exec(
            update(Card).where(Card.id == card_id, Card.deck_id == deck_id).values(**values)
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(f"Could not update card {card_id}: {e.orig}") from e

    logger.info(f"Updated card {card_id}: {sorted(values)} ({result.rowcount} row(s))")
    return DatabaseQueryResult(rows_affected=result.rowcount)


def delete_card(session: Session, deck_id: int, card_id: int) -> DatabaseQueryResult:
    result = session.exec(delete(Card).where(Card.id == card_id, Card.deck_id == deck_id))
    session.commit()

    logger.info(f"Deleted card {card_id} from deck {deck_id} ({result.rowcount} row(s))")
    return DatabaseQueryResult(rows_affected=result.rowcount)
