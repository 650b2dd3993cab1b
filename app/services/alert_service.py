"""Regional alert service."""

from __future__ import annotations

import uuid

from app.schemas.community import Alert, AlertCreate, AlertUpdate
from app.schemas.user import UserResponse
from app.services.common import RecordStore, ensure_organization, ensure_same_region
from app.services.repositories import AlertRepository
from app.utils.time import now_utc


class AlertService:
    """Create and manage notices broadcast to one region."""

    def __init__(self, store: RecordStore) -> None:
        self.alerts = AlertRepository(store)

    def list_alerts(self, user: UserResponse) -> list[Alert]:
        """Return alerts for the user's region only."""
        return [alert for alert in self.alerts.ensure_seeded() if alert.region == user.region]

    def create_alert(self, payload: AlertCreate, user: UserResponse) -> Alert:
        """Create an alert in the administrator's region."""
        ensure_organization(user, "Only administrators can create alerts")
        alert = Alert(
            id=uuid.uuid4().hex,
            created_at=now_utc(),
            created_by=user.name,
            region=user.region,
            **payload.model_dump(),
        )
        return self.alerts.insert_first(alert)

    def update_alert(self, alert_id: str, payload: AlertUpdate, user: UserResponse) -> Alert:
        ensure_organization(user, "Only administrators can edit alerts")
        alert = self.alerts.get(alert_id)
        ensure_same_region(user, alert.region, "Alert belongs to another region")
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        return self.alerts.replace(alert.model_copy(update=changes))

    def delete_alert(self, alert_id: str, user: UserResponse) -> None:
        ensure_organization(user, "Only administrators can delete alerts")
        alert = self.alerts.get(alert_id)
        ensure_same_region(user, alert.region, "Alert belongs to another region")
        self.alerts.remove(alert_id)
