"""Collection schedule endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_store
from app.schemas.community import ScheduleCreate, ScheduleUpdate
from app.schemas.user import UserResponse
from app.services.common import RecordStore
from app.services.schedule_service import ScheduleService

router = APIRouter()


@router.get("")
def list_schedules(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return the caller's regional schedule, Monday first."""
    return {"schedules": ScheduleService(store).list_schedules(user.region)}


@router.get("/next")
def next_collection(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"next": ScheduleService(store).next_collection(user.region)}


@router.post("", status_code=201)
def create_schedule(
    payload: ScheduleCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"schedule": ScheduleService(store).create_schedule(payload, user)}


@router.patch("/{schedule_id}")
def update_schedule(
    schedule_id: str,
    payload: ScheduleUpdate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"schedule": ScheduleService(store).update_schedule(schedule_id, payload, user)}


@router.delete("/{schedule_id}")
def delete_schedule(
    schedule_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    ScheduleService(store).delete_schedule(schedule_id, user)
    return {"success": True}
