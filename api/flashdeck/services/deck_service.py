"""
Deck service. Every query is scoped to the owning user.
"""
import logging
from datetime import datetime
from sqlmodel import Session, select
from sqlalchemy import update, delete
from sqlalchemy.exc import IntegrityError
from typing import List

from flashdeck.core.exceptions import ConflictError, NotFoundError, ValidationError
from flashdeck.models import Deck
from flashdeck.schemas.common import DatabaseQueryResult
from flashdeck.schemas.deck import DeckForm

logger = logging.getLogger(__name__)


def list_decks(session: Session, user_id: int) -> List[Deck]:
    """Decks of a user, oldest first."""
    return list(
        session.exec(select(Deck).where(Deck.user_id == user_id).order_by(Deck.id)).all()
    )


def get_deck(session: Session, deck_id: int, user_id: int) -> Deck:
    deck = session.exec(
        select(Deck).where(Deck.id == deck_id, Deck.user_id == user_id)
    ).first()
    if not deck:
        raise NotFoundError(f"Deck with id {deck_id} not found")
    return deck


def create_deck(session: Session, deck_form: DeckForm, user_id: int) -> DatabaseQueryResult:
    if deck_form.from_language is None:
        raise ValidationError("from_language is required")
    if deck_form.to_language_primary is None:
        raise ValidationError("to_language_primary is required")

    deck = Deck(
        user_id=user_id,
        from_language=deck_form.from_language,
        to_language_primary=deck_form.to_language_primary,
        to_language_secondary=deck_form.to_language_secondary,
        design_key=deck_form.design_key,
    )
    session.add(deck)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(f"User {user_id} does not exist") from e

    logger.info(f"Created deck {deck.id} for user {user_id}")
    return DatabaseQueryResult(rows_affected=1)


def update_deck(
    session: Session,
    deck_id: int,
    deck_form: DeckForm,
    user_id: int
) -> DatabaseQueryResult:
    values = deck_form.model_dump(exclude_none=True)
    if not values:
        raise ValidationError("No fields to update")

    result = session.exec(
        update(Deck).where(Deck.id == deck_id, Deck.user_id == user_id).values(**values)
    )
    session.commit()

    logger.info(f"Updated deck {deck_id}: {sorted(values)} ({result.rowcount} row(s))")
    return DatabaseQueryResult(rows_affected=result.rowcount)


def touch_deck(session: Session, deck: Deck) -> datetime:
    """
    Mark the start of a review session on ``deck``.

    Returns:
        The deck's previous ``seen_at``, i.e. when the last session started
    """
    previous_seen_at = deck.seen_at
    update_deck(session, deck.id, DeckForm(seen_at=datetime.utcnow()), deck.user_id)
    return previous_seen_at


def delete_deck(session: Session, deck_id: int, user_id: int) -> DatabaseQueryResult:
    """
    Delete a deck owned by ``user_id``.

    Raises:
        ConflictError: If the deck still has cards
    """
    try:
        result = session.exec(delete(Deck).where(Deck.id == deck_id, Deck.user_id == user_id))
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Refused to delete deck {deck_id}: {e.orig}")
        raise ConflictError(f"Deck {deck_id} still has cards") from e

    logger.info(f"Deleted deck {deck_id} ({result.rowcount} row(s))")
    return DatabaseQueryResult(rows_affected=result.rowcount)
