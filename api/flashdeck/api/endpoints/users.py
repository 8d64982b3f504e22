"""
User endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from flashdeck.api.deps import require_session_token
from flashdeck.core.database import get_session
from flashdeck.schemas.common import ApiResponse, DatabaseQueryResult
from flashdeck.schemas.user import UserForm, UserResponse
from flashdeck.services import user_service

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_session_token)],
)


@router.get("", response_model=ApiResponse[List[UserResponse]])
async def get_users(session: Session = Depends(get_session)):
    """List all users."""
    users = user_service.list_users(session)
    return ApiResponse(data=[UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: int, session: Session = Depends(get_session)):
    user = user_service.get_user(session, user_id)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.post("", response_model=ApiResponse[DatabaseQueryResult], status_code=status.HTTP_201_CREATED)
async def post_user(
    user_form: UserForm = Depends(UserForm.as_form),
    session: Session = Depends(get_session)
):
    """Create a user from a form with ``name`` and ``email``."""
    return ApiResponse(data=user_service.create_user(session, user_form))


@router.put("/{user_id}", response_model=ApiResponse[DatabaseQueryResult])
async def put_user(
    user_id: int,
    user_form: UserForm = Depends(UserForm.as_form),
    session: Session = Depends(get_session)
):
    """Update the fields present in the form."""
    return ApiResponse(data=user_service.update_user(session, user_id, user_form))


@router.delete("/{user_id}", response_model=ApiResponse[DatabaseQueryResult])
async def delete_user(user_id: int, session: Session = Depends(get_session)):
    """Delete a user. Fails with 409 while the user still owns decks."""
    return ApiResponse(data=user_service.delete_user(session, user_id))
