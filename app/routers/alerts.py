"""Regional alert endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_store
from app.schemas.community import AlertCreate, AlertUpdate
from app.schemas.user import UserResponse
from app.services.alert_service import AlertService
from app.services.common import RecordStore

router = APIRouter()


@router.get("")
def list_alerts(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"alerts": AlertService(store).list_alerts(user)}


@router.post("", status_code=201)
def create_alert(
    payload: AlertCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Broadcast an alert to the administrator's region."""
    return {"alert": AlertService(store).create_alert(payload, user)}


@router.patch("/{alert_id}")
def update_alert(
    alert_id: str,
    payload: AlertUpdate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"alert": AlertService(store).update_alert(alert_id, payload, user)}


@router.delete("/{alert_id}")
def delete_alert(
    alert_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    AlertService(store).delete_alert(alert_id, user)
    return {"success": True}
