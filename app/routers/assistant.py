"""Generative assistant endpoints.

These always answer: when the model is unreachable the service substitutes a
local fallback, so no route here surfaces an upstream failure.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from google import genai

from app.dependencies import get_current_user, get_genai, get_store
from app.schemas.collection_point import ChatRequest
from app.schemas.user import UserResponse
from app.services.assistant_service import AssistantService
from app.services.collection_point_service import CollectionPointService
from app.services.common import RecordStore, ensure_organization

router = APIRouter()


@router.get("/tip")
def daily_tip(
    _: UserResponse = Depends(get_current_user),
    client: genai.Client | None = Depends(get_genai),
) -> dict:
    return {"tip": AssistantService(client).generate_tip()}


@router.post("/chat")
def chat(
    payload: ChatRequest,
    _: UserResponse = Depends(get_current_user),
    client: genai.Client | None = Depends(get_genai),
) -> dict:
    return {"reply": AssistantService(client).chat(payload.history, payload.message)}


@router.post("/route")
def optimize_route(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    client: genai.Client | None = Depends(get_genai),
) -> dict:
    """Suggest a pickup order for the administrator's regional points."""
    ensure_organization(user, "Only administrators can plan collection routes")
    points = CollectionPointService(store).list_points(user.region)
    return {"route": AssistantService(client).optimize_route(points)}


@router.get("/predictions")
def predict_zone_status(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
    client: genai.Client | None = Depends(get_genai),
) -> dict:
    points = CollectionPointService(store).list_points(user.region)
    return {"points": AssistantService(client).predict_zone_status(points)}
