"""Reward catalog and redemption workflow."""

from __future__ import annotations

import logging
import uuid
from typing import Literal

from app.schemas.gamification import RedemptionRequest, Reward, RewardCreate, RewardUpdate
from app.schemas.user import UserResponse
from app.services.common import RecordStore, ensure_organization, ensure_same_region
from app.services.journal_service import JournalService
from app.services.ledger_service import LedgerService
from app.services.repositories import RedemptionRepository, RewardRepository, UserRepository
from app.utils.errors import ConflictError, InsufficientResourceError, InvalidInputError
from app.utils.time import now_utc

logger = logging.getLogger(__name__)


class RewardService:
    """Reward CRUD plus the request -> approval state machine."""

    def __init__(self, store: RecordStore) -> None:
        self.rewards = RewardRepository(store)
        self.redemptions = RedemptionRepository(store)
        self.users = UserRepository(store)
        self.ledger = LedgerService(store)
        self.journal = JournalService(store)

    def list_rewards(self) -> list[Reward]:
        """Return the catalog, persisting the seed on first access."""
        return self.rewards.ensure_seeded()

    def create_reward(self, payload: RewardCreate, user: UserResponse) -> Reward:
        """Create a reward (administrators only)."""
        ensure_organization(user, "Only administrators can create rewards")
        reward = Reward(id=uuid.uuid4().hex, available=True, **payload.model_dump())
        return self.rewards.insert_first(reward)

    def update_reward(self, reward_id: str, payload: RewardUpdate, user: UserResponse) -> Reward:
        """Edit a reward (administrators only)."""
        ensure_organization(user, "Only administrators can edit rewards")
        reward = self.rewards.get(reward_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        return self.rewards.replace(reward.model_copy(update=changes))

    def delete_reward(self, reward_id: str, user: UserResponse) -> None:
        """Delete a reward (administrators only)."""
        ensure_organization(user, "Only administrators can delete rewards")
        self.rewards.remove(reward_id)

    def request_redemption(
        self,
        reward_id: str,
        claimed_balance: int | None,
        user: UserResponse,
    ) -> RedemptionRequest:
        """File a pending redemption.

        ``claimed_balance`` is what the client believes the balance is; the
        check always uses the ledger. Nothing is deducted until approval.
        """
        reward = self.rewards.get(reward_id)
        if reward.stock <= 0:
            raise InsufficientResourceError("Reward is out of stock")

        balance = self.ledger.read(user.id)
        if claimed_balance is not None and claimed_balance != balance:
            logger.warning(
                "Client balance %s differs from ledger %s for %s",
                claimed_balance,
                balance,
                user.id,
            )
        if balance < reward.cost:
            raise InsufficientResourceError(
                f"Insufficient points: need {reward.cost}, have {balance}"
            )

        redemption = RedemptionRequest(
            id=uuid.uuid4().hex,
            user_id=user.id,
            user_name=user.name,
            region=user.region,
            reward_id=reward.id,
            reward_title=reward.title,
            cost=reward.cost,
            status="pending",
            created_at=now_utc(),
        )
        self.redemptions.insert_first(redemption)
        logger.info("Redemption %s requested for reward %s", redemption.id, reward.id)
        return redemption

    def _region_of(self, redemption: RedemptionRequest) -> str | None:
        if redemption.region:
            return redemption.region
        owner = self.users.find(redemption.user_id)
        return owner.region if owner else None

    def process(
        self,
        redemption_id: str,
        outcome: Literal["delivered", "rejected"],
        feedback: str,
        actor: UserResponse,
    ) -> RedemptionRequest:
        """Deliver or reject a pending redemption.

        Delivery re-checks stock and the live balance; the deduction, stock
        decrement and status change are journaled together.
        """
        ensure_organization(actor, "Only administrators can process redemptions")
        redemption = self.redemptions.get(redemption_id)
        ensure_same_region(
            actor, self._region_of(redemption), "Redemption belongs to another region"
        )
        if redemption.status != "pending":
            raise ConflictError("Redemption has already been processed", code="ALREADY_PROCESSED")

        interrupted = self.journal.open_entry_for(redemption_id)
        if outcome == "rejected":
            if interrupted is not None:
                raise ConflictError("Delivery is already in progress", code="DELIVERY_IN_PROGRESS")
            if not feedback.strip():
                raise InvalidInputError("Feedback is required when rejecting a redemption")
            return self.redemptions.replace(
                redemption.model_copy(
                    update={
                        "status": "rejected",
                        "admin_feedback": feedback.strip(),
                        "processed_at": now_utc(),
                    }
                )
            )

        if interrupted is not None:
            logger.warning("Resuming interrupted delivery of redemption %s", redemption_id)
            self.journal.run(interrupted)
            return self.redemptions.get(redemption_id)

        reward = self.rewards.find(redemption.reward_id)
        if reward is None or reward.stock <= 0:
            raise InsufficientResourceError("Insufficient stock to approve")
        balance = self.ledger.read(redemption.user_id)
        if balance < redemption.cost:
            raise InsufficientResourceError("User no longer has enough points")

        entry = self.journal.open_redemption(redemption, feedback.strip())
        self.journal.run(entry)
        logger.info("Redemption %s delivered", redemption_id)
        return self.redemptions.get(redemption_id)

    def list_pending_redemptions(self, actor: UserResponse) -> list[RedemptionRequest]:
        """Return redemptions awaiting approval in the administrator's region."""
        ensure_organization(actor, "Only administrators can process redemptions")
        return [
            row
            for row in self.redemptions.all()
            if row.status == "pending" and self._region_of(row) == actor.region
        ]

    def list_user_redemptions(self, user_id: str) -> list[RedemptionRequest]:
        """Return every redemption filed by ``user_id``."""
        return [row for row in self.redemptions.all() if row.user_id == user_id]
