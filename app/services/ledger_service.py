"""Points ledger service."""

from __future__ import annotations

import logging
import uuid
from typing import Literal

from app.config import settings
from app.schemas.gamification import LedgerEntry
from app.services.common import RecordStore
from app.services.repositories import NS_POINTS, LedgerEntryRepository
from app.utils.errors import InvalidInputError
from app.utils.time import now_utc

logger = logging.getLogger(__name__)

Direction = Literal["add", "subtract"]


class LedgerService:
    """Per-user point balances.

    Balances are only ever moved by ``adjust``, and ``adjust`` is only called
    from the challenge review and redemption approval workflows. There is no
    way to set a balance directly.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.entries = LedgerEntryRepository(store)

    def _balances(self) -> dict[str, dict[str, int]]:
        return self.store.load(NS_POINTS, {})

    def read(self, user_id: str) -> int:
        """Return the balance, initialising it to the product default on first access."""
        balances = self._balances()
        if user_id not in balances:
            balances[user_id] = {"points": settings.default_points}
            self.store.save(NS_POINTS, balances)
        return int(balances[user_id]["points"])

    def is_applied(self, user_id: str, reference_id: str, direction: Direction) -> bool:
        """Return True when ``reference_id`` already moved this balance in ``direction``."""
        applied = self._balances().get(user_id, {}).get("applied", [])
        return f"{direction}:{reference_id}" in applied

    def adjust(
        self,
        user_id: str,
        amount: int,
        direction: Direction,
        reference_id: str | None = None,
        description: str = "",
    ) -> int:
        """Move a balance and return the new value.

        Subtractions floor at zero. Applied references are saved together
        with the balance, so a movement whose ``reference_id`` was already
        applied in the same direction is never applied again.
        """
        if amount <= 0:
            raise InvalidInputError("Point adjustments must be positive")
        if reference_id and self.is_applied(user_id, reference_id, direction):
            logger.info("Ledger movement %s/%s already applied", reference_id, direction)
            return self.read(user_id)

        balances = self._balances()
        account = balances.get(user_id, {"points": settings.default_points})
        current = int(account["points"])
        applied = list(account.get("applied", []))
        if reference_id:
            applied.append(f"{direction}:{reference_id}")
        if direction == "add":
            updated = current + amount
        else:
            updated = max(0, current - amount)
        balances[user_id] = {"points": updated, "applied": applied}
        self.store.save(NS_POINTS, balances)

        self.entries.insert_first(
            LedgerEntry(
                id=uuid.uuid4().hex,
                user_id=user_id,
                direction=direction,
                amount=amount,
                balance_after=updated,
                reference_id=reference_id,
                description=description,
                created_at=now_utc(),
            )
        )
        logger.info("Ledger %s %s for %s -> %s", direction, amount, user_id, updated)
        return updated

    def list_entries(self, user_id: str, limit: int = 50) -> list[LedgerEntry]:
        """Return the user's movements, newest first."""
        rows = [entry for entry in self.entries.all() if entry.user_id == user_id]
        rows.sort(key=lambda entry: entry.created_at, reverse=True)
        return rows[:limit]
