"""Collection point endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_store
from app.schemas.collection_point import CollectionPointCreate, PointStatusUpdate
from app.schemas.user import UserResponse
from app.services.collection_point_service import CollectionPointService
from app.services.common import RecordStore

router = APIRouter()


@router.get("")
def list_points(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"points": CollectionPointService(store).list_points(user.region)}


@router.post("", status_code=201)
def add_point(
    payload: CollectionPointCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"point": CollectionPointService(store).add_point(payload, user)}


@router.patch("/{point_id}/status")
def update_point_status(
    point_id: str,
    payload: PointStatusUpdate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Record a new fill level for a point."""
    return {"point": CollectionPointService(store).update_status(point_id, payload.status, user)}


@router.delete("/{point_id}")
def delete_point(
    point_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    CollectionPointService(store).delete_point(point_id, user)
    return {"success": True}
