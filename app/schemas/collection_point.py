"""Collection point, route and external lookup schemas."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class BinStatus(str, Enum):
    """Fill level of a collection point."""

    EMPTY = "Vazio"
    HALF = "Meio Cheio"
    FULL = "Cheio"
    OVERFLOWING = "Transbordando"


PointType = Literal["Reciclável", "Orgânico", "Vidro"]


class CollectionPoint(BaseModel):
    """Physical drop-off point."""

    id: str
    address: str
    status: BinStatus = BinStatus.EMPTY
    last_collection: str = "Nunca"
    type: PointType
    region: str
    lat: float | None = None
    lng: float | None = None
    predicted_level: str | None = None


class CollectionPointCreate(BaseModel):
    """Request body for adding a collection point."""

    address: str = Field(..., min_length=1)
    status: BinStatus = BinStatus.EMPTY
    type: PointType
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)


class PointStatusUpdate(BaseModel):
    """Request body for updating a point's fill level."""

    status: BinStatus


class OptimizedRoute(BaseModel):
    """Suggested visiting order for collection points."""

    points: list[CollectionPoint]
    estimated_time: str
    distance_saved: str
    reasoning: str


class ChatTurn(BaseModel):
    """One role-tagged message of chat history."""

    role: Literal["user", "model"]
    text: str


class ChatRequest(BaseModel):
    """Request body for the assistant chat."""

    message: str = Field(..., min_length=1)
    history: list[ChatTurn] = Field(default_factory=list)


class AddressData(BaseModel):
    """Address resolved from a postal code."""

    cep: str = ""
    street: str
    neighborhood: str
    city: str
    state: str
