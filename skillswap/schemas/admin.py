from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UserModerationAction = Literal["warn", "suspend", "ban"]
SkillModerationAction = Literal["flag", "reject", "approve"]
AnnouncementType = Literal["info", "warning", "maintenance"]


# ======================
# MODERATION
# ======================

class UserModerationRequest(BaseModel):
    action: UserModerationAction
    reason: str = Field(..., min_length=3, max_length=1000)
    duration_days: Optional[int] = Field(None, ge=1, le=3650, description="Omit for a permanent action")


class SkillModerationRequest(BaseModel):
    action: SkillModerationAction
    reason: str = Field(..., min_length=3, max_length=1000)


class UserModerationResponse(BaseModel):
    id: int
    user_id: int
    moderator_id: Optional[int] = None
    action: str
    reason: str
    expires_at: Optional[datetime] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SkillModerationResponse(BaseModel):
    id: int
    skill_id: int
    moderator_id: Optional[int] = None
    action: str
    reason: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ======================
# ANNOUNCEMENTS
# ======================

class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: AnnouncementType = "info"
    expires_at: Optional[datetime] = None
    is_active: bool = True


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    message: Optional[str] = Field(None, min_length=1)
    type: Optional[AnnouncementType] = None
    expires_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    @field_validator("title", "message", "type", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class AnnouncementResponse(BaseModel):
    id: int
    author_id: Optional[int] = None
    title: str
    message: str
    type: str
    is_active: bool
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ======================
# STATS
# ======================

class PlatformStats(BaseModel):
    total_users: int
    active_swaps: int
    pending_reports: int
    total_reports: int


class ActivityReport(BaseModel):
    generated_at: datetime
    users: Dict[str, int]
    swap_requests: Dict[str, int]
    skills: Dict[str, int]
    reports: Dict[str, int]
