# skillswap/models/__init__.py
# Import models in dependency order
from .user import User
from .skill import Skill
from .availability import AvailabilitySlot
from .swap_request import SwapRequest
from .review import Review
from .report import Report
from .moderation import UserModeration, SkillModeration, Announcement

__all__ = [
    "User",
    "Skill",
    "AvailabilitySlot",
    "SwapRequest",
    "Review",
    "Report",
    "UserModeration",
    "SkillModeration",
    "Announcement",
]
