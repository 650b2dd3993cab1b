"""Monthly regional ranking tests."""

from __future__ import annotations

from datetime import UTC, datetime

from app.schemas.request import CollectionRequest
from app.schemas.user import UserRecord
from app.services.common import MemoryRecordStore
from app.services.leaderboard_service import LeaderboardService
from app.services.repositories import RequestRepository, UserRepository

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _user(user_id: str, name: str, region: str = "Centro", role: str = "resident") -> UserRecord:
    return UserRecord(id=user_id, name=name, email=f"{user_id}@x.com", role=role, region=region)


def _collected(
    request_id: str,
    user_id: str,
    created_at: datetime,
    region: str = "Centro",
    status: str = "collected",
) -> CollectionRequest:
    return CollectionRequest(
        id=request_id,
        user_id=user_id,
        user_name=user_id,
        community_id=region,
        category="Recyclable",
        action_type="Discard",
        status=status,
        created_at=created_at,
    )


def _seed(store: MemoryRecordStore, users: list[UserRecord], requests: list[CollectionRequest]) -> None:
    UserRepository(store).save_all(users)
    RequestRepository(store).save_all(requests)


def test_counts_only_collected_requests_of_the_month(store: MemoryRecordStore) -> None:
    _seed(
        store,
        [_user("a", "Ana"), _user("b", "Bruno")],
        [
            _collected("1", "a", datetime(2026, 3, 2, 10, 0, tzinfo=UTC)),
            _collected("2", "a", datetime(2026, 3, 10, 10, 0, tzinfo=UTC)),
            _collected("3", "b", datetime(2026, 3, 11, 10, 0, tzinfo=UTC)),
            _collected("4", "b", datetime(2026, 3, 12, 10, 0, tzinfo=UTC), status="queued"),
            _collected("5", "b", datetime(2026, 2, 27, 10, 0, tzinfo=UTC)),
        ],
    )
    ranking = LeaderboardService(store).rank("Centro", now=NOW)

    assert [(row.user_id, row.rank, row.points) for row in ranking] == [("a", 1, 100), ("b", 2, 50)]
    assert ranking[0].kg_recycled == 10
    assert ranking[0].trees_saved == 0.2
    assert ranking[0].requests_count == 2


def test_month_boundary_follows_local_timezone(store: MemoryRecordStore) -> None:
    """01:00 UTC on March 1st is still February in Sao Paulo."""
    _seed(
        store,
        [_user("a", "Ana")],
        [_collected("1", "a", datetime(2026, 3, 1, 1, 0, tzinfo=UTC))],
    )
    ranking = LeaderboardService(store).rank("Centro", now=NOW)
    assert ranking[0].points == 0


def test_requests_from_other_regions_do_not_count(store: MemoryRecordStore) -> None:
    _seed(
        store,
        [_user("a", "Ana"), _user("v", "Vera", region="Vila Madalena")],
        [
            _collected("1", "a", datetime(2026, 3, 5, tzinfo=UTC), region="Vila Madalena"),
            _collected("2", "v", datetime(2026, 3, 5, tzinfo=UTC), region="Vila Madalena"),
        ],
    )
    ranking = LeaderboardService(store).rank("Centro", now=NOW)
    assert [(row.user_id, row.points) for row in ranking] == [("a", 0)]


def test_ties_break_by_name_then_id_and_organizations_excluded(store: MemoryRecordStore) -> None:
    users = [
        _user("z", "bia"),
        _user("y", "Bia"),
        _user("x", "Ana"),
        _user("org", "Associação", role="organization"),
    ]
    _seed(store, users, [])
    ranking = LeaderboardService(store).rank("Centro", now=NOW)
    assert [row.user_id for row in ranking] == ["x", "y", "z"]


def test_ranking_is_capped_at_ten(store: MemoryRecordStore) -> None:
    users = [_user(f"u{index:02d}", f"Morador {index:02d}") for index in range(15)]
    _seed(store, users, [])
    ranking = LeaderboardService(store).rank("Centro", now=NOW)
    assert len(ranking) == 10
    assert ranking[-1].rank == 10
