"""Monthly regional ranking service."""

from __future__ import annotations

from datetime import datetime

from app.schemas.gamification import RankedUser
from app.services.common import ROLE_RESIDENT, RecordStore
from app.services.repositories import RequestRepository, UserRepository, avatar_for
from app.utils.time import month_range

POINTS_PER_COLLECTION = 50
KG_PER_COLLECTION = 5
KG_PER_TREE = 50
TOP_N = 10


class LeaderboardService:
    """Compute the monthly leaderboard from collected requests."""

    def __init__(self, store: RecordStore) -> None:
        self.users = UserRepository(store)
        self.requests = RequestRepository(store)

    def rank(self, region: str, now: datetime | None = None) -> list[RankedUser]:
        """Return the top residents of ``region`` for the current calendar month.

        Only requests with status ``collected``, created inside the month and
        filed in ``region`` are counted. Nothing is cached.
        """
        start, end = month_range(now)
        residents = [
            user
            for user in self.users.all()
            if user.region == region and user.role == ROLE_RESIDENT
        ]

        counts: dict[str, int] = {}
        for request in self.requests.all():
            if request.status != "collected" or request.community_id != region:
                continue
            if not start <= request.created_at < end:
                continue
            counts[request.user_id] = counts.get(request.user_id, 0) + 1

        entries: list[RankedUser] = []
        for user in residents:
            count = counts.get(user.id, 0)
            kg_recycled = count * KG_PER_COLLECTION
            entries.append(
                RankedUser(
                    user_id=user.id,
                    name=user.name,
                    avatar=user.avatar or avatar_for(user.name),
                    points=count * POINTS_PER_COLLECTION,
                    kg_recycled=kg_recycled,
                    trees_saved=round(kg_recycled / KG_PER_TREE, 2),
                    requests_count=count,
                )
            )

        entries.sort(key=lambda row: (-row.points, row.name.lower(), row.user_id))
        top = entries[:TOP_N]
        for index, entry in enumerate(top, start=1):
            entry.rank = index
        return top
