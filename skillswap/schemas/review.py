# skillswap/schemas/review.py
"""
Review & Rating Pydantic Schemas
Request/response models with validation
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, Optional
from datetime import datetime

from .user import UserSummary


# ======================
# REVIEW SCHEMAS
# ======================

class ReviewCreate(BaseModel):
    """Schema for creating a review"""
    swap_request_id: int = Field(..., description="Swap request identifier")
    reviewee_id: Optional[int] = Field(None, description="Defaults to the other party of the swap")
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    comment: Optional[str] = Field(None, max_length=1000, description="Review comment (max 1000 chars)")

    @field_validator('comment')
    @classmethod
    def validate_comment(cls, v):
        """Blank comments are stored as no comment"""
        if v is None:
            return None
        return v.strip() or None


class ReviewResponse(BaseModel):
    """Review response for API"""
    id: int
    swap_request_id: int
    reviewer_id: int
    reviewee_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewer: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)


class RatingSummaryResponse(BaseModel):
    """Rating summary used for average-rating display"""
    user_id: int
    average_rating: float = Field(..., description="Average rating (0-5)")
    total_reviews: int
    rating_distribution: Dict[int, int] = Field(..., description="Count of each rating (1-5)")
