# skillswap/schemas/__init__.py

# Skill & availability schemas
from .skill import SkillCreate, SkillUpdate, SkillResponse
from .availability import AvailabilitySlotIn, AvailabilitySlotResponse

# User schemas
from .user import UserSummary, UserResponse, UserWithSkills, PublicProfile, ProfileUpdate

# Auth schemas
from .auth import RegisterRequest, LoginRequest, AuthResponse, TokenData

# Swap request schemas
from .swap_request import SwapRequestCreate, SwapStatusUpdate, SwapRequestDetail

# Review schemas
from .review import ReviewCreate, ReviewResponse, RatingSummaryResponse

# Report schemas
from .report import ReportCreate, ReportStatusUpdate, ReportResponse

# Admin schemas
from .admin import (
    UserModerationRequest,
    SkillModerationRequest,
    UserModerationResponse,
    SkillModerationResponse,
    AnnouncementCreate,
    AnnouncementUpdate,
    AnnouncementResponse,
    PlatformStats,
    ActivityReport,
)

__all__ = [
    "SkillCreate",
    "SkillUpdate",
    "SkillResponse",
    "AvailabilitySlotIn",
    "AvailabilitySlotResponse",
    "UserSummary",
    "UserResponse",
    "UserWithSkills",
    "PublicProfile",
    "ProfileUpdate",
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "TokenData",
    "SwapRequestCreate",
    "SwapStatusUpdate",
    "SwapRequestDetail",
    "ReviewCreate",
    "ReviewResponse",
    "RatingSummaryResponse",
    "ReportCreate",
    "ReportStatusUpdate",
    "ReportResponse",
    "UserModerationRequest",
    "SkillModerationRequest",
    "UserModerationResponse",
    "SkillModerationResponse",
    "AnnouncementCreate",
    "AnnouncementUpdate",
    "AnnouncementResponse",
    "PlatformStats",
    "ActivityReport",
]
