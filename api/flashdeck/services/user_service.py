"""
User service for business logic related to user operations.
"""
import logging
from sqlmodel import Session, select
from sqlalchemy import update, delete
from sqlalchemy.exc import IntegrityError
from typing import List

from flashdeck.core.exceptions import ConflictError, NotFoundError, ValidationError
from flashdeck.models import User
from flashdeck.schemas.common import DatabaseQueryResult
from flashdeck.schemas.user import UserForm

logger = logging.getLogger(__name__)


def list_users(session: Session) -> List[User]:
    return list(session.exec(select(User).order_by(User.id)).all())


def get_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def create_user(session: Session, user_form: UserForm) -> DatabaseQueryResult:
    """Insert a user. Both name and email are required."""
    if user_form.name is None:
        raise ValidationError("name is required")
    if user_form.email is None:
        raise ValidationError("email is required")

    user = User(name=user_form.name, email=user_form.email)
    session.add(user)
    session.commit()

    logger.info(f"Created user {user.id}")
    return DatabaseQueryResult(rows_affected=1)


def update_user(session: Session, user_id: int, user_form: UserForm) -> DatabaseQueryResult:
    """Apply the fields present in the form. Unknown ids affect zero rows."""
    values = user_form.model_dump(exclude_none=True)
    if not values:
        raise ValidationError("No fields to update")

    result = session.exec(update(User).where(User.id == user_id).values(**values))
    session.commit()

    logger.info(f"Updated user {user_id}: {sorted(values)} ({result.rowcount} row(s))")
    return DatabaseQueryResult(rows_affected=result.rowcount)


def delete_user(session: Session, user_id: int) -> DatabaseQueryResult:
    """
    Delete a user.

    Decks reference users without cascading, so a user that still owns decks
    cannot be deleted.

    Raises:
        ConflictError: If the user still owns decks
    """
    try:
        result = session.exec(delete(User).where(User.id == user_id))
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Refused to delete user {user_id}: {e.orig}")
        raise ConflictError(f"User {user_id} still owns decks") from e

    logger.info(f"Deleted user {user_id} ({result.rowcount} row(s))")
    return DatabaseQueryResult(rows_affected=result.rowcount)
