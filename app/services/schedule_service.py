"""Collection schedule service."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta

from app.schemas.community import (
    CollectionSchedule,
    NextCollection,
    ScheduleCreate,
    ScheduleUpdate,
)
from app.schemas.user import UserResponse
from app.services.common import RecordStore, ensure_organization, ensure_same_region
from app.services.repositories import ScheduleRepository
from app.utils.errors import InvalidInputError
from app.utils.time import local_zone, now_local

WEEKDAYS = {
    "Segunda-feira": 0,
    "Terça-feira": 1,
    "Quarta-feira": 2,
    "Quinta-feira": 3,
    "Sexta-feira": 4,
    "Sábado": 5,
    "Domingo": 6,
}


class ScheduleService:
    """Weekly collection slots per region."""

    def __init__(self, store: RecordStore) -> None:
        self.schedules = ScheduleRepository(store)

    def list_schedules(self, region: str) -> list[CollectionSchedule]:
        """Return the region's slots ordered Monday to Sunday."""
        rows = [row for row in self.schedules.ensure_seeded() if row.region == region]
        return sorted(rows, key=lambda row: WEEKDAYS.get(row.day_of_week, 7))

    @staticmethod
    def _validate_day(day_of_week: str | None) -> None:
        if day_of_week is not None and day_of_week not in WEEKDAYS:
            raise InvalidInputError(f"Unknown day of week: {day_of_week}")

    def create_schedule(self, payload: ScheduleCreate, user: UserResponse) -> CollectionSchedule:
        ensure_organization(user, "Only administrators can create schedules")
        self._validate_day(payload.day_of_week)
        schedule = CollectionSchedule(id=uuid.uuid4().hex, region=user.region, **payload.model_dump())
        return self.schedules.append(schedule)

    def update_schedule(
        self, schedule_id: str, payload: ScheduleUpdate, user: UserResponse
    ) -> CollectionSchedule:
        ensure_organization(user, "Only administrators can edit schedules")
        self._validate_day(payload.day_of_week)
        schedule = self.schedules.get(schedule_id)
        ensure_same_region(user, schedule.region, "Schedule belongs to another region")
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        return self.schedules.replace(schedule.model_copy(update=changes))

    def delete_schedule(self, schedule_id: str, user: UserResponse) -> None:
        ensure_organization(user, "Only administrators can remove schedules")
        schedule = self.schedules.get(schedule_id)
        ensure_same_region(user, schedule.region, "Schedule belongs to another region")
        self.schedules.remove(schedule_id)

    def next_collection(self, region: str, now: datetime | None = None) -> NextCollection | None:
        """Return the earliest upcoming slot for ``region``, or None without schedules."""
        current = (now or now_local()).astimezone(local_zone())
        best: tuple[datetime, CollectionSchedule] | None = None

        for schedule in self.list_schedules(region):
            weekday = WEEKDAYS.get(schedule.day_of_week)
            if weekday is None:
                continue
            hour, minute = (int(part) for part in schedule.start_time.split(":"))
            days_until = weekday - current.weekday()
            candidate = current.replace(hour=hour, minute=minute, second=0, microsecond=0)
            if days_until < 0 or (days_until == 0 and candidate <= current):
                days_until += 7
            candidate += timedelta(days=days_until)
            if best is None or candidate < best[0]:
                best = (candidate, schedule)

        if best is None:
            return None

        event, schedule = best
        diff_days = (event.date() - current.date()).days
        if diff_days == 0:
            day_label = "Hoje"
        elif diff_days == 1:
            day_label = "Amanhã"
        else:
            day_label = schedule.day_of_week

        return NextCollection(
            day_label=day_label,
            time_range=f"{schedule.start_time} - {schedule.end_time}",
            waste_type=schedule.waste_type,
            sector=schedule.sector,
        )
