"""
Request dependencies shared by the API and the pages.
"""
import secrets
from typing import Optional

from fastapi import Depends, Query
from sqlmodel import Session

from flashdeck.core.config import settings
from flashdeck.core.database import get_session
from flashdeck.core.exceptions import AuthenticationError
from flashdeck.models import User


def is_valid_session_token(token: Optional[str]) -> bool:
    """True when ``token`` matches the configured session token."""
    if not token:
        return False
    return secrets.compare_digest(token, settings.session_uuid)


def require_session_token(uuid: Optional[str] = Query(None)) -> str:
    """Reject the request unless ``?uuid=`` carries the session token."""
    if not is_valid_session_token(uuid):
        raise AuthenticationError("Invalid or missing session token")
    return uuid


def get_active_user(
    token: str = Depends(require_session_token),
    session: Session = Depends(get_session)
) -> User:
    """The user every deck and card operation acts for."""
    user = session.get(User, settings.active_user_id)
    if not user:
        raise AuthenticationError(f"Active user {settings.active_user_id} does not exist")
    return user
