"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import forget_session, get_current_user, get_session_token, get_store
from app.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)
from app.services.auth_service import AuthService
from app.services.common import RecordStore

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, store: RecordStore = Depends(get_store)) -> AuthResponse:
    """Create an account and return a fresh session."""
    return AuthService(store).register(payload)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, store: RecordStore = Depends(get_store)) -> AuthResponse:
    return AuthService(store).login(payload.email, payload.password)


@router.get("/session")
def auth_session(user: UserResponse = Depends(get_current_user)) -> dict:
    """Return the currently authenticated user."""
    return {"user": user}


@router.post("/logout")
def logout(
    token: str = Depends(get_session_token),
    store: RecordStore = Depends(get_store),
) -> dict:
    """End the caller's session; the token stops working immediately."""
    AuthService(store).logout(token)
    forget_session(token)
    return {"success": True}


@router.patch("/profile")
def update_profile(
    payload: ProfileUpdate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    updated = AuthService(store).update_profile(user.id, payload)
    return {"user": updated}
