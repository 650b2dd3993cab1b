"""Collection request business logic."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from pydantic import ValidationError

from app.schemas.request import (
    CollectionRequest,
    CollectionRequestCreate,
    OrganizationRequestUpdate,
    RequestStatus,
    ResidentRequestUpdate,
)
from app.schemas.user import UserResponse
from app.services.common import RecordStore, ensure_organization, is_organization
from app.services.repositories import RequestRepository
from app.utils.errors import ForbiddenError, InvalidInputError
from app.utils.time import now_utc

logger = logging.getLogger(__name__)

PENDING_WORK_STATUSES = {"created", "queued"}
RESIDENT_EDITABLE_STATUSES = {"created", "queued"}
NULLABLE_FIELDS = {"scheduled_at"}


class RequestService:
    """Create, list and mutate pickup requests."""

    def __init__(self, store: RecordStore) -> None:
        self.requests = RequestRepository(store)

    def list_for(self, user: UserResponse) -> list[CollectionRequest]:
        """Residents see their own requests; administrators see their region's."""
        rows = self.requests.all()
        if not is_organization(user):
            own = [row for row in rows if row.user_id == user.id]
            return sorted(own, key=lambda row: row.created_at, reverse=True)

        regional = [row for row in rows if row.community_id == user.region]
        regional.sort(key=lambda row: row.created_at, reverse=True)
        regional.sort(key=lambda row: row.status not in PENDING_WORK_STATUSES)
        return regional

    def get_request(self, request_id: str) -> CollectionRequest:
        """Return one request by id."""
        return self.requests.get(request_id)

    def create(self, payload: CollectionRequestCreate, user: UserResponse) -> CollectionRequest:
        """Create a request scoped to the owner's current region."""
        request = CollectionRequest(
            id=f"req-{uuid.uuid4().hex[:12]}",
            user_id=user.id,
            user_name=user.name,
            community_id=user.region,
            status="created",
            created_at=now_utc(),
            **payload.model_dump(),
        )
        self.requests.insert_first(request)
        logger.info("Collection request %s created in %s", request.id, request.community_id)
        return request

    def _ensure_can_mutate(self, request: CollectionRequest, user: UserResponse) -> None:
        if is_organization(user):
            if request.community_id != user.region:
                raise ForbiddenError("Request belongs to another region")
            return

        if request.user_id != user.id:
            raise ForbiddenError("Permission denied")
        if request.status not in RESIDENT_EDITABLE_STATUSES:
            raise ForbiddenError("Request can no longer be changed")

    def _parse_patch(self, patch: dict[str, Any], user: UserResponse) -> dict[str, Any]:
        model = OrganizationRequestUpdate if is_organization(user) else ResidentRequestUpdate
        try:
            parsed = model.model_validate(patch)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise InvalidInputError(f"Invalid field '{field}': {first.get('msg')}") from exc
        changes = parsed.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in changes.items()
            if value is not None or key in NULLABLE_FIELDS
        }

    def update(
        self, request_id: str, patch: dict[str, Any], user: UserResponse
    ) -> CollectionRequest:
        """Apply a typed partial update permitted for the actor's role."""
        request = self.requests.get(request_id)
        self._ensure_can_mutate(request, user)
        changes = self._parse_patch(patch, user)
        updated = request.model_copy(update=changes)
        return self.requests.replace(updated)

    def delete(self, request_id: str, user: UserResponse) -> None:
        """Physically remove a request."""
        request = self.requests.get(request_id)
        self._ensure_can_mutate(request, user)
        self.requests.remove(request_id)
        logger.info("Collection request %s deleted by %s", request_id, user.id)

    def set_status(
        self, request_id: str, status: RequestStatus, user: UserResponse
    ) -> CollectionRequest:
        """Move a request to ``status``; administrators of the request's region only."""
        ensure_organization(user, "Only administrators can change request status")
        request = self.requests.get(request_id)
        self._ensure_can_mutate(request, user)
        updated = self.requests.replace(request.model_copy(update={"status": status}))
        logger.info("Collection request %s -> %s", request_id, status)
        return updated
