"""Write-ahead journal for multi-namespace approvals."""

from __future__ import annotations

import logging
import uuid

from app.schemas.gamification import JournalEntry, RedemptionRequest
from app.services.common import RecordStore
from app.services.ledger_service import LedgerService
from app.services.repositories import JournalRepository, RedemptionRepository, RewardRepository
from app.utils.time import now_utc

logger = logging.getLogger(__name__)

STEP_LEDGER = "ledger"
STEP_STOCK = "stock"
STEP_STATUS = "status"
REDEMPTION_STEPS = (STEP_LEDGER, STEP_STOCK, STEP_STATUS)


class JournalService:
    """Record intent before touching several namespaces, then roll it forward.

    Every step is keyed on the redemption id in the record it writes, so
    replaying a step whose completion was never marked is a no-op. An
    interrupted approval is resumed by ``recover``.
    """

    def __init__(self, store: RecordStore) -> None:
        self.journal = JournalRepository(store)
        self.rewards = RewardRepository(store)
        self.redemptions = RedemptionRepository(store)
        self.ledger = LedgerService(store)

    def open_redemption(self, redemption: RedemptionRequest, feedback: str) -> JournalEntry:
        """Write the intent to deliver ``redemption``."""
        entry = JournalEntry(
            id=uuid.uuid4().hex,
            redemption_id=redemption.id,
            user_id=redemption.user_id,
            reward_id=redemption.reward_id,
            cost=redemption.cost,
            feedback=feedback,
            created_at=now_utc(),
        )
        return self.journal.insert_first(entry)

    def _apply_step(self, entry: JournalEntry, step: str) -> None:
        if step == STEP_LEDGER:
            self.ledger.adjust(
                entry.user_id,
                entry.cost,
                "subtract",
                reference_id=entry.redemption_id,
                description="Reward redemption delivered",
            )
        elif step == STEP_STOCK:
            reward = self.rewards.get(entry.reward_id)
            if entry.redemption_id in reward.delivered_redemption_ids:
                return
            self.rewards.replace(
                reward.model_copy(
                    update={
                        "stock": max(0, reward.stock - 1),
                        "delivered_redemption_ids": [
                            *reward.delivered_redemption_ids,
                            entry.redemption_id,
                        ],
                    }
                )
            )
        elif step == STEP_STATUS:
            redemption = self.redemptions.get(entry.redemption_id)
            if redemption.status == "delivered":
                return
            self.redemptions.replace(
                redemption.model_copy(
                    update={
                        "status": "delivered",
                        "admin_feedback": entry.feedback,
                        "processed_at": now_utc(),
                    }
                )
            )

    def run(self, entry: JournalEntry) -> JournalEntry:
        """Apply every pending step of ``entry`` and commit it."""
        for step in REDEMPTION_STEPS:
            if step in entry.steps_done:
                continue
            self._apply_step(entry, step)
            entry = entry.model_copy(update={"steps_done": [*entry.steps_done, step]})
            self.journal.replace(entry)

        committed = entry.model_copy(update={"status": "committed", "committed_at": now_utc()})
        return self.journal.replace(committed)

    def open_entries(self) -> list[JournalEntry]:
        """Return entries that were never committed."""
        return [entry for entry in self.journal.all() if entry.status == "open"]

    def open_entry_for(self, redemption_id: str) -> JournalEntry | None:
        """Return the uncommitted entry for ``redemption_id``, if any."""
        for entry in self.open_entries():
            if entry.redemption_id == redemption_id:
                return entry
        return None

    def recover(self) -> int:
        """Roll every open entry forward and return how many were completed."""
        recovered = 0
        for entry in self.open_entries():
            logger.warning(
                "Recovering journal entry %s (done: %s)",
                entry.id,
                ",".join(entry.steps_done) or "none",
            )
            self.run(entry)
            recovered += 1
        return recovered
