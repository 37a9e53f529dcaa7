from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .skill import SkillResponse
from .user import UserSummary

SwapStatus = Literal["pending", "accepted", "rejected", "completed", "cancelled"]


# ======================
# SWAP REQUEST INPUT
# ======================

class SwapRequestCreate(BaseModel):
    receiver_id: int
    offered_skill_id: Optional[int] = None
    requested_skill_id: Optional[int] = None
    message: Optional[str] = Field(None, max_length=2000)
    proposed_time: Optional[datetime] = None

    @field_validator("message")
    @classmethod
    def blank_message_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None


class SwapStatusUpdate(BaseModel):
    status: SwapStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ======================
# SWAP REQUEST OUTPUT
# ======================

class SwapReviewSummary(BaseModel):
    id: int
    reviewer_id: int
    reviewee_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SwapRequestDetail(BaseModel):
    """Swap request with both parties and skills resolved."""
    id: int
    requester_id: int
    receiver_id: int
    offered_skill_id: Optional[int] = None
    requested_skill_id: Optional[int] = None
    message: Optional[str] = None
    status: str
    proposed_time: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    requester: UserSummary
    receiver: UserSummary
    offered_skill: Optional[SkillResponse] = None
    requested_skill: Optional[SkillResponse] = None
    reviews: List[SwapReviewSummary] = []

    model_config = ConfigDict(from_attributes=True)
