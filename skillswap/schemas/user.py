from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .availability import AvailabilitySlotResponse
from .skill import SkillResponse


def _sorted_slots(slots):
    return sorted(slots, key=lambda slot: (slot.day_of_week, slot.start_time))


# ======================
# USER DISPLAY SCHEMAS
# ======================

class UserSummary(BaseModel):
    """Minimal user card embedded in swap requests and reviews."""
    id: int
    first_name: str
    last_name: str
    display_name: str
    location: Optional[str] = None
    profile_image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    email: str
    bio: Optional[str] = None
    is_public: bool
    is_admin: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserWithSkills(UserResponse):
    skills: List[SkillResponse] = []
    availability: List[AvailabilitySlotResponse] = []

    @field_validator("availability")
    @classmethod
    def sort_availability(cls, v):
        return _sorted_slots(v)


class PublicProfile(UserSummary):
    """Public profile; email and admin flag are not exposed."""
    bio: Optional[str] = None
    skills: List[SkillResponse] = []
    availability: List[AvailabilitySlotResponse] = []
    updated_at: Optional[datetime] = None

    @field_validator("availability")
    @classmethod
    def sort_availability(cls, v):
        return _sorted_slots(v)


# ======================
# PROFILE UPDATE
# ======================

class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = Field(None, max_length=150)
    profile_image_url: Optional[str] = Field(None, max_length=255)
    is_public: Optional[bool] = None

    # Only the optional profile text fields can be cleared
    @field_validator("first_name", "last_name", "is_public", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v
