"""Regional user administration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import forget_session, get_current_user, get_store
from app.schemas.user import UserResponse
from app.services.auth_service import AuthService
from app.services.common import RecordStore

router = APIRouter()


@router.get("")
def list_users(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """List accounts in the administrator's region."""
    return {"users": AuthService(store).list_users(user)}


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    for token in AuthService(store).delete_user(user_id, user):
        forget_session(token)
    return {"success": True}
