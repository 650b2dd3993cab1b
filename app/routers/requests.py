"""Collection request endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from app.dependencies import get_current_user, get_store
from app.schemas.request import CollectionRequestCreate, StatusUpdate
from app.schemas.user import UserResponse
from app.services.common import RecordStore
from app.services.community_service import CommunityService
from app.services.request_service import RequestService

router = APIRouter()


@router.get("")
def list_requests(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Residents see their own requests; administrators see their region's."""
    return {"requests": RequestService(store).list_for(user)}


@router.post("", status_code=201)
def create_request(
    payload: CollectionRequestCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"request": RequestService(store).create(payload, user)}


@router.patch("/{request_id}")
def update_request(
    request_id: str,
    patch: dict[str, Any] = Body(...),
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Apply a partial update; allowed fields depend on the caller's role."""
    return {"request": RequestService(store).update(request_id, patch, user)}


@router.delete("/{request_id}")
def delete_request(
    request_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    RequestService(store).delete(request_id, user)
    return {"success": True}


@router.post("/{request_id}/status")
def set_request_status(
    request_id: str,
    payload: StatusUpdate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"request": RequestService(store).set_status(request_id, payload.status, user)}


@router.post("/{request_id}/share", status_code=201)
def share_request(
    request_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Publish one of the caller's requests to the community feed."""
    request = RequestService(store).get_request(request_id)
    return {"post": CommunityService(store).share_request(request, user)}
