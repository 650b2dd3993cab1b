"""Postal code lookup endpoint."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends

from app.dependencies import get_http
from app.services.location_service import LocationService

router = APIRouter()


@router.get("/cep/{cep}")
def lookup_cep(cep: str, http: httpx.Client = Depends(get_http)) -> dict:
    """Return the address for a CEP, or ``null`` when it cannot be resolved."""
    return {"address": LocationService(http).get_address_by_cep(cep)}
