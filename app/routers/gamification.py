"""Points, ranking, challenge and reward endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_current_user, get_store
from app.schemas.gamification import (
    ChallengeCreate,
    ChallengeUpdate,
    ProcessRedemptionRequest,
    RedeemRequest,
    ReviewRequest,
    RewardCreate,
    RewardUpdate,
    SubmissionCreate,
)
from app.schemas.user import UserResponse
from app.services.challenge_service import ChallengeService
from app.services.common import RecordStore
from app.services.leaderboard_service import LeaderboardService
from app.services.ledger_service import LedgerService
from app.services.reward_service import RewardService

router = APIRouter()


@router.get("/points")
def get_points(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return the caller's current points balance."""
    return {"user_id": user.id, "points": LedgerService(store).read(user.id)}


@router.get("/ledger")
def get_ledger(
    limit: int = Query(default=50, ge=1, le=200),
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return the caller's most recent balance movements."""
    service = LedgerService(store)
    return {
        "entries": service.list_entries(user.id, limit=limit),
        "points": service.read(user.id),
    }


@router.get("/ranking")
def get_ranking(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return this month's top residents in the caller's region."""
    return {"region": user.region, "ranking": LeaderboardService(store).rank(user.region)}


@router.get("/challenges")
def list_challenges(
    _: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"challenges": ChallengeService(store).list_challenges()}


@router.post("/challenges", status_code=201)
def create_challenge(
    payload: ChallengeCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"challenge": ChallengeService(store).create_challenge(payload, user)}


@router.patch("/challenges/{challenge_id}")
def update_challenge(
    challenge_id: str,
    payload: ChallengeUpdate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"challenge": ChallengeService(store).update_challenge(challenge_id, payload, user)}


@router.delete("/challenges/{challenge_id}")
def delete_challenge(
    challenge_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    ChallengeService(store).delete_challenge(challenge_id, user)
    return {"success": True}


@router.post("/challenges/{challenge_id}/submissions", status_code=201)
def submit_challenge(
    challenge_id: str,
    payload: SubmissionCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """File proof for a challenge; one live submission per challenge."""
    submission = ChallengeService(store).submit(challenge_id, payload.proof_text, user)
    return {"submission": submission}


@router.get("/submissions")
def list_my_submissions(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"submissions": ChallengeService(store).list_user_submissions(user.id)}


@router.get("/submissions/pending")
def list_pending_submissions(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Review queue for administrators."""
    return {"submissions": ChallengeService(store).list_pending(user)}


@router.post("/submissions/{submission_id}/review")
def review_submission(
    submission_id: str,
    payload: ReviewRequest,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Approve or reject a submission; approval awards the challenge XP once."""
    return ChallengeService(store).review(submission_id, payload.status, payload.feedback, user)


@router.get("/rewards")
def list_rewards(
    _: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"rewards": RewardService(store).list_rewards()}


@router.post("/rewards", status_code=201)
def create_reward(
    payload: RewardCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"reward": RewardService(store).create_reward(payload, user)}


@router.patch("/rewards/{reward_id}")
def update_reward(
    reward_id: str,
    payload: RewardUpdate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"reward": RewardService(store).update_reward(reward_id, payload, user)}


@router.delete("/rewards/{reward_id}")
def delete_reward(
    reward_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    RewardService(store).delete_reward(reward_id, user)
    return {"success": True}


@router.post("/rewards/{reward_id}/redeem", status_code=201)
def redeem_reward(
    reward_id: str,
    payload: RedeemRequest,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """File a pending redemption; points move only when it is delivered."""
    redemption = RewardService(store).request_redemption(reward_id, payload.current_points, user)
    return {"redemption": redemption}


@router.get("/redemptions")
def list_my_redemptions(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"redemptions": RewardService(store).list_user_redemptions(user.id)}


@router.get("/redemptions/pending")
def list_pending_redemptions(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"redemptions": RewardService(store).list_pending_redemptions(user)}


@router.post("/redemptions/{redemption_id}/process")
def process_redemption(
    redemption_id: str,
    payload: ProcessRedemptionRequest,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Deliver or reject a pending redemption."""
    redemption = RewardService(store).process(
        redemption_id, payload.status, payload.feedback, user
    )
    return {"redemption": redemption}
