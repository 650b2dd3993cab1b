"""Collection schedule tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from app.schemas.community import ScheduleCreate, ScheduleUpdate
from app.services.common import MemoryRecordStore
from app.services.schedule_service import ScheduleService
from app.utils.errors import ForbiddenError, InvalidInputError
from app.utils.time import local_zone


def _local(year: int, month: int, day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=local_zone())


def test_list_is_ordered_monday_first(store: MemoryRecordStore) -> None:
    days = [row.day_of_week for row in ScheduleService(store).list_schedules("Centro")]
    assert days == ["Segunda-feira", "Segunda-feira", "Quarta-feira", "Sexta-feira"]


@pytest.mark.parametrize(
    ("now", "label", "time_range"),
    [
        # Monday 07:00: first slot is today
        (_local(2026, 3, 2, 7), "Hoje", "08:00 - 12:00"),
        # Monday 12:30: afternoon slot still today
        (_local(2026, 3, 2, 12, 30), "Hoje", "13:00 - 17:00"),
        # Tuesday: Wednesday slot is tomorrow
        (_local(2026, 3, 3, 10), "Amanhã", "08:00 - 12:00"),
        # Friday after the slot: wraps to Monday
        (_local(2026, 3, 6, 12), "Segunda-feira", "08:00 - 12:00"),
    ],
)
def test_next_collection(store: MemoryRecordStore, now: datetime, label: str, time_range: str) -> None:
    upcoming = ScheduleService(store).next_collection("Centro", now=now)
    assert upcoming is not None
    assert (upcoming.day_label, upcoming.time_range) == (label, time_range)


def test_next_collection_without_schedules(store: MemoryRecordStore) -> None:
    assert ScheduleService(store).next_collection("Nowhere") is None


def test_schedule_crud_is_region_scoped(store: MemoryRecordStore, admin, resident, make_user) -> None:
    service = ScheduleService(store)
    created = service.create_schedule(
        ScheduleCreate(day_of_week="Sábado", start_time="09:00", end_time="10:00", waste_type="Vidro"),
        admin,
    )
    assert created.region == "Centro"

    with pytest.raises(ForbiddenError):
        service.delete_schedule(created.id, resident)
    with pytest.raises(ForbiddenError):
        service.update_schedule(
            created.id,
            ScheduleUpdate(sector="Norte"),
            make_user("org-2", role="organization", region="Vila Madalena"),
        )
    with pytest.raises(InvalidInputError):
        service.update_schedule(created.id, ScheduleUpdate(day_of_week="Funday"), admin)

    updated = service.update_schedule(created.id, ScheduleUpdate(sector="Norte"), admin)
    assert updated.sector == "Norte"
    service.delete_schedule(created.id, admin)
    assert all(row.id != created.id for row in service.list_schedules("Centro"))
