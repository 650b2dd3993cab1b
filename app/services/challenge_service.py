"""Challenge catalog and proof submission workflow."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Literal

from app.schemas.gamification import (
    Challenge,
    ChallengeCreate,
    ChallengeSubmission,
    ChallengeUpdate,
)
from app.schemas.user import UserResponse
from app.services.common import RecordStore, ensure_organization, ensure_same_region
from app.services.ledger_service import LedgerService
from app.services.repositories import ChallengeRepository, SubmissionRepository, UserRepository
from app.utils.errors import ConflictError, InvalidInputError
from app.utils.time import now_utc

logger = logging.getLogger(__name__)


class ChallengeService:
    """Challenge CRUD plus the submit -> review state machine."""

    def __init__(self, store: RecordStore) -> None:
        self.challenges = ChallengeRepository(store)
        self.submissions = SubmissionRepository(store)
        self.users = UserRepository(store)
        self.ledger = LedgerService(store)

    def list_challenges(self) -> list[Challenge]:
        """Return the catalog, persisting the seed on first access."""
        return self.challenges.ensure_seeded()

    def create_challenge(self, payload: ChallengeCreate, user: UserResponse) -> Challenge:
        """Create a challenge (administrators only)."""
        ensure_organization(user, "Only administrators can create challenges")
        challenge = Challenge(id=uuid.uuid4().hex, **payload.model_dump())
        return self.challenges.insert_first(challenge)

    def update_challenge(
        self, challenge_id: str, payload: ChallengeUpdate, user: UserResponse
    ) -> Challenge:
        """Edit a challenge (administrators only)."""
        ensure_organization(user, "Only administrators can edit challenges")
        challenge = self.challenges.get(challenge_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        return self.challenges.replace(challenge.model_copy(update=changes))

    def delete_challenge(self, challenge_id: str, user: UserResponse) -> None:
        """Delete a challenge (administrators only)."""
        ensure_organization(user, "Only administrators can delete challenges")
        self.challenges.remove(challenge_id)

    def submit(self, challenge_id: str, proof_text: str, user: UserResponse) -> ChallengeSubmission:
        """File proof for a challenge.

        A resident may hold at most one non-rejected submission per challenge.
        Resubmitting after a rejection replaces the rejected record.
        """
        challenge = self.challenges.get(challenge_id)
        if not proof_text.strip():
            raise InvalidInputError("Proof text is required")

        existing = self.submissions.all()
        for submission in existing:
            if (
                submission.user_id == user.id
                and submission.challenge_id == challenge_id
                and submission.status != "rejected"
            ):
                raise ConflictError(
                    "A submission for this challenge already exists",
                    code="DUPLICATE_SUBMISSION",
                )

        submission = ChallengeSubmission(
            id=uuid.uuid4().hex,
            challenge_id=challenge.id,
            challenge_title=challenge.title,
            user_id=user.id,
            user_name=user.name,
            region=user.region,
            proof_text=proof_text.strip(),
            status="pending",
            created_at=now_utc(),
        )
        others = [
            row
            for row in existing
            if not (row.user_id == user.id and row.challenge_id == challenge_id)
        ]
        self.submissions.save_all([submission, *others])
        logger.info("Submission %s filed for challenge %s", submission.id, challenge_id)
        return submission

    def _region_of(self, submission: ChallengeSubmission) -> str | None:
        if submission.region:
            return submission.region
        owner = self.users.find(submission.user_id)
        return owner.region if owner else None

    def review(
        self,
        submission_id: str,
        outcome: Literal["approved", "rejected"],
        feedback: str,
        actor: UserResponse,
    ) -> dict[str, Any]:
        """Approve or reject a pending submission, awarding points on approval."""
        ensure_organization(actor, "Only administrators can review submissions")
        submission = self.submissions.get(submission_id)
        ensure_same_region(
            actor, self._region_of(submission), "Submission belongs to another region"
        )
        if submission.status != "pending":
            raise ConflictError("Submission has already been reviewed", code="ALREADY_REVIEWED")
        if outcome == "rejected" and not feedback.strip():
            raise InvalidInputError("Feedback is required when rejecting a submission")

        xp_awarded = 0
        if outcome == "approved":
            challenge = self.challenges.find(submission.challenge_id)
            if challenge is not None and challenge.xp_reward > 0:
                self.ledger.adjust(
                    submission.user_id,
                    challenge.xp_reward,
                    "add",
                    reference_id=submission.id,
                    description=f"Challenge approved: {challenge.title}",
                )
                xp_awarded = challenge.xp_reward

        reviewed = self.submissions.replace(
            submission.model_copy(
                update={
                    "status": outcome,
                    "admin_feedback": feedback.strip(),
                    "reviewed_at": now_utc(),
                    "reviewed_by": actor.id,
                }
            )
        )
        logger.info("Submission %s %s (+%s)", submission_id, outcome, xp_awarded)
        return {"submission": reviewed, "xp_awarded": xp_awarded}

    def list_user_submissions(self, user_id: str) -> list[ChallengeSubmission]:
        """Return every submission filed by ``user_id``."""
        return [row for row in self.submissions.all() if row.user_id == user_id]

    def list_pending(self, actor: UserResponse) -> list[ChallengeSubmission]:
        """Return submissions awaiting review in the administrator's region."""
        ensure_organization(actor, "Only administrators can review submissions")
        return [
            row
            for row in self.submissions.all()
            if row.status == "pending" and self._region_of(row) == actor.region
        ]
