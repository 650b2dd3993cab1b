"""Collection request schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

RequestStatus = Literal["created", "queued", "in_route", "collected", "cancelled"]
ItemCategory = Literal["Electronic", "Furniture", "Recyclable", "Oil", "Other"]
ActionType = Literal["Discard", "Donate", "Sell"]


class CollectionRequest(BaseModel):
    """One resident's request to have an item picked up."""

    id: str
    user_id: str
    user_name: str
    community_id: str
    photo_url: str = ""
    category: ItemCategory
    action_type: ActionType
    address: str = ""
    description: str = ""
    scheduled_at: datetime | None = None
    status: RequestStatus = "created"
    created_at: datetime


class CollectionRequestCreate(BaseModel):
    """Request body for creating a pickup request."""

    category: ItemCategory
    action_type: ActionType
    description: str = Field("", max_length=1000)
    photo_url: str = ""
    address: str = ""
    scheduled_at: datetime | None = None


class ResidentRequestUpdate(BaseModel):
    """Fields a resident may change on their own early-status request."""

    model_config = {"extra": "forbid"}

    category: ItemCategory | None = None
    action_type: ActionType | None = None
    description: str | None = Field(default=None, max_length=1000)
    photo_url: str | None = None
    address: str | None = None
    scheduled_at: datetime | None = None


class OrganizationRequestUpdate(ResidentRequestUpdate):
    """Administrators may additionally move the request status."""

    status: RequestStatus | None = None


class StatusUpdate(BaseModel):
    """Request body for status transitions."""

    status: RequestStatus
