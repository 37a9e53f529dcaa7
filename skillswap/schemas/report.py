from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ReportContentType = Literal["profile", "skill", "bio", "swap_request", "review"]
ReportStatus = Literal["pending", "reviewed", "resolved"]


class ReportCreate(BaseModel):
    reported_user_id: Optional[int] = None
    content_type: ReportContentType
    content_id: Optional[str] = Field(None, max_length=64)
    reason: str = Field(..., min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Reason must be at least 3 characters")
        return v


class ReportStatusUpdate(BaseModel):
    status: ReportStatus


class ReportResponse(BaseModel):
    id: int
    reporter_id: int
    reported_user_id: Optional[int] = None
    content_type: str
    content_id: Optional[str] = None
    reason: str
    description: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
