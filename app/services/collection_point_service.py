"""Collection point service."""

from __future__ import annotations

import uuid

from app.schemas.collection_point import (
    BinStatus,
    CollectionPoint,
    CollectionPointCreate,
)
from app.schemas.user import UserResponse
from app.services.common import RecordStore, ensure_organization, ensure_same_region
from app.services.repositories import CollectionPointRepository


class CollectionPointService:
    """Drop-off points and their fill levels."""

    def __init__(self, store: RecordStore) -> None:
        self.points = CollectionPointRepository(store)

    def list_points(self, region: str) -> list[CollectionPoint]:
        return [point for point in self.points.ensure_seeded() if point.region == region]

    def add_point(self, payload: CollectionPointCreate, user: UserResponse) -> CollectionPoint:
        """Add a point; it always lands in the administrator's region."""
        ensure_organization(user, "Only administrators can add collection points")
        point = CollectionPoint(
            id=uuid.uuid4().hex,
            last_collection="Nunca",
            region=user.region,
            **payload.model_dump(),
        )
        return self.points.append(point)

    def delete_point(self, point_id: str, user: UserResponse) -> None:
        ensure_organization(user, "Only administrators can remove collection points")
        point = self.points.get(point_id)
        ensure_same_region(user, point.region, "Collection point belongs to another region")
        self.points.remove(point_id)

    def update_status(self, point_id: str, status: BinStatus, user: UserResponse) -> CollectionPoint:
        """Set the fill level; emptying a point stamps today's collection."""
        ensure_organization(user, "Only administrators can update collection points")
        point = self.points.get(point_id)
        ensure_same_region(user, point.region, "Collection point belongs to another region")
        changes: dict[str, object] = {"status": status}
        if status == BinStatus.EMPTY:
            changes["last_collection"] = "Hoje"
        return self.points.replace(point.model_copy(update=changes))
