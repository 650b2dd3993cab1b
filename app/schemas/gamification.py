"""Challenge, reward, points and ranking schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ChallengeType = Literal["daily", "weekly", "special"]
SubmissionStatus = Literal["pending", "approved", "rejected"]
RedemptionStatus = Literal["pending", "delivered", "rejected"]


class Challenge(BaseModel):
    """Admin-authored task with a fixed point reward."""

    id: str
    title: str
    description: str = ""
    xp_reward: int = Field(..., ge=0)
    type: ChallengeType = "special"


class ChallengeCreate(BaseModel):
    """Request body for creating a challenge."""

    title: str = Field(..., min_length=1)
    description: str = ""
    xp_reward: int = Field(..., ge=1)
    type: ChallengeType = "special"


class ChallengeUpdate(BaseModel):
    """Editable challenge fields."""

    model_config = {"extra": "forbid"}

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    xp_reward: int | None = Field(default=None, ge=1)
    type: ChallengeType | None = None


class ChallengeSubmission(BaseModel):
    """Resident's proof of completion for one challenge."""

    id: str
    challenge_id: str
    challenge_title: str
    user_id: str
    user_name: str
    region: str = ""
    proof_text: str
    status: SubmissionStatus = "pending"
    admin_feedback: str | None = None
    created_at: datetime
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None


class SubmissionCreate(BaseModel):
    """Request body for submitting challenge proof."""

    proof_text: str = Field(..., min_length=1)


class ReviewRequest(BaseModel):
    """Request body for reviewing a submission."""

    status: Literal["approved", "rejected"]
    feedback: str = ""


class Reward(BaseModel):
    """Catalog item redeemable for points."""

    id: str
    title: str
    cost: int = Field(..., ge=0)
    description: str = ""
    stock: int = Field(0, ge=0)
    available: bool = True
    delivered_redemption_ids: list[str] = Field(default_factory=list)


class RewardCreate(BaseModel):
    """Request body for creating a reward."""

    title: str = Field(..., min_length=1)
    cost: int = Field(..., ge=1)
    description: str = ""
    stock: int = Field(0, ge=0)


class RewardUpdate(BaseModel):
    """Editable reward fields."""

    model_config = {"extra": "forbid"}

    title: str | None = Field(default=None, min_length=1)
    cost: int | None = Field(default=None, ge=1)
    description: str | None = None
    stock: int | None = Field(default=None, ge=0)
    available: bool | None = None


class RedemptionRequest(BaseModel):
    """Resident's request to redeem a reward."""

    id: str
    user_id: str
    user_name: str
    region: str = ""
    reward_id: str
    reward_title: str
    cost: int
    status: RedemptionStatus = "pending"
    admin_feedback: str | None = None
    created_at: datetime
    processed_at: datetime | None = None


class RedeemRequest(BaseModel):
    """Request body for redeeming a reward."""

    current_points: int | None = None


class ProcessRedemptionRequest(BaseModel):
    """Request body for approving or rejecting a redemption."""

    status: Literal["delivered", "rejected"]
    feedback: str = ""


class LedgerEntry(BaseModel):
    """One point balance movement."""

    id: str
    user_id: str
    direction: Literal["add", "subtract"]
    amount: int
    balance_after: int
    reference_id: str | None = None
    description: str = ""
    created_at: datetime


class JournalEntry(BaseModel):
    """Write-ahead record covering the mutations of one approval."""

    id: str
    kind: Literal["redemption"] = "redemption"
    redemption_id: str
    user_id: str
    reward_id: str
    cost: int
    feedback: str = ""
    steps_done: list[str] = Field(default_factory=list)
    status: Literal["open", "committed"] = "open"
    created_at: datetime
    committed_at: datetime | None = None


class RankedUser(BaseModel):
    """Monthly regional leaderboard entry, derived on every read."""

    user_id: str
    name: str
    avatar: str
    points: int
    kg_recycled: int
    trees_saved: float
    requests_count: int
    rank: int = 0
