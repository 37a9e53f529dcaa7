# skillswap/services/moderation_service.py
"""
Moderation & Admin Service
User and skill moderation, announcements and platform statistics.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from skillswap import models
from skillswap.crud import moderation as moderation_crud
from skillswap.crud import report as report_crud
from skillswap.crud import skill as skill_crud
from skillswap.crud import swap_request as swap_crud
from skillswap.crud import user as user_crud
from skillswap.models.moderation import SKILL_MODERATION_ACTIONS, USER_MODERATION_ACTIONS
from skillswap.models.report import REPORT_STATUSES
from skillswap.models.skill import SKILL_TYPES
from skillswap.models.swap_request import SWAP_STATUSES
from skillswap.utils.clock import utcnow

logger = logging.getLogger(__name__)


# ======================
# USER MODERATION
# ======================

def moderate_user(
    db: Session,
    user_id: int,
    moderator_id: Optional[int],
    action: str,
    reason: str,
    duration_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> models.UserModeration:
    """
    Record a warn, suspend or ban against a user.

    A missing duration makes the action permanent.

    Raises:
        LookupError: If the user does not exist
        ValueError: If the action is unknown or the target is an admin
    """
    action = (action or "").strip().lower()
    if action not in USER_MODERATION_ACTIONS:
        raise ValueError(f"Invalid action. Use one of: {', '.join(USER_MODERATION_ACTIONS)}")

    user = user_crud.get_user(db, user_id)
    if not user:
        raise LookupError("User not found")
    if user.is_admin:
        raise ValueError("Admin accounts cannot be moderated")

    expires_at = None
    if duration_days is not None:
        if duration_days <= 0:
            raise ValueError("Duration must be a positive number of days")
        expires_at = (now or utcnow()) + timedelta(days=duration_days)

    try:
        record = moderation_crud.create_user_moderation(
            db,
            user_id=user_id,
            moderator_id=moderator_id,
            action=action,
            reason=reason,
            expires_at=expires_at,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(record)
    logger.info(
        "Moderation %s on user_id=%s by moderator_id=%s (expires_at=%s)",
        action, user_id, moderator_id, expires_at,
    )
    return record


def lift_ban(db: Session, user_id: int) -> int:
    """Deactivate every active ban on a user. Returns the number lifted."""
    if not user_crud.get_user(db, user_id):
        raise LookupError("User not found")

    try:
        lifted = moderation_crud.deactivate_bans(db, user_id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Lifted %d ban(s) on user_id=%s", lifted, user_id)
    return lifted


def get_user_moderation_history(db: Session, user_id: int) -> List[models.UserModeration]:
    if not user_crud.get_user(db, user_id):
        raise LookupError("User not found")
    return moderation_crud.get_user_moderation_history(db, user_id)


# ======================
# SKILL MODERATION
# ======================

def moderate_skill(
    db: Session,
    skill_id: int,
    moderator_id: Optional[int],
    action: str,
    reason: str,
) -> models.SkillModeration:
    """
    Record a flag, reject or approve against a skill.

    A skill whose latest record is a rejection is hidden from search.
    """
    action = (action or "").strip().lower()
    if action not in SKILL_MODERATION_ACTIONS:
        raise ValueError(f"Invalid action. Use one of: {', '.join(SKILL_MODERATION_ACTIONS)}")

    if not skill_crud.get_skill(db, skill_id):
        raise LookupError("Skill not found")

    try:
        record = moderation_crud.create_skill_moderation(
            db,
            skill_id=skill_id,
            moderator_id=moderator_id,
            action=action,
            reason=reason,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(record)
    logger.info("Moderation %s on skill_id=%s by moderator_id=%s", action, skill_id, moderator_id)
    return record


def get_skill_moderation_history(db: Session, skill_id: int) -> List[models.SkillModeration]:
    if not skill_crud.get_skill(db, skill_id):
        raise LookupError("Skill not found")
    return moderation_crud.get_skill_moderation_history(db, skill_id)


# ======================
# ANNOUNCEMENTS
# ======================

def create_announcement(db: Session, author_id: Optional[int], fields: Dict[str, Any]) -> models.Announcement:
    try:
        announcement = moderation_crud.create_announcement(db, author_id=author_id, **fields)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(announcement)
    logger.info("Announcement %s created by user_id=%s", announcement.id, author_id)
    return announcement


def update_announcement(db: Session, announcement_id: int, updates: Dict[str, Any]) -> models.Announcement:
    try:
        announcement = moderation_crud.update_announcement(db, announcement_id, updates)
        if not announcement:
            raise LookupError("Announcement not found")
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(announcement)
    logger.info("Announcement %s updated", announcement_id)
    return announcement


def delete_announcement(db: Session, announcement_id: int) -> None:
    try:
        if not moderation_crud.delete_announcement(db, announcement_id):
            raise LookupError("Announcement not found")
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Announcement %s deleted", announcement_id)


def list_announcements(db: Session) -> List[models.Announcement]:
    return moderation_crud.get_all_announcements(db)


def list_active_announcements(db: Session, now: Optional[datetime] = None) -> List[models.Announcement]:
    return moderation_crud.get_active_announcements(db, now)


# ======================
# PLATFORM STATISTICS
# ======================

def get_platform_stats(db: Session) -> Dict[str, int]:
    """Dashboard counters, computed on demand."""
    return {
        "total_users": db.query(models.User).count(),
        "active_swaps": swap_crud.count_by_status(db, "accepted"),
        "pending_reports": report_crud.count_reports(db, "pending"),
        "total_reports": report_crud.count_reports(db),
    }


def _grouped_counts(db: Session, column, keys) -> Dict[str, int]:
    counts = {key: 0 for key in keys}
    for key, count in db.query(column, func.count()).group_by(column).all():
        counts[key] = count
    counts["total"] = sum(counts.values())
    return counts


def get_activity_report(db: Session) -> Dict[str, Any]:
    """Aggregate counts across users, swaps, skills and reports."""
    now = utcnow()
    total_users = db.query(models.User).count()
    public_users = db.query(models.User).filter(models.User.is_public.is_(True)).count()
    admins = db.query(models.User).filter(models.User.is_admin.is_(True)).count()

    return {
        "generated_at": now,
        "users": {
            "total": total_users,
            "public": public_users,
            "admins": admins,
            "banned": len(moderation_crud.get_banned_user_ids(db, now)),
        },
        "swap_requests": _grouped_counts(db, models.SwapRequest.status, SWAP_STATUSES),
        "skills": _grouped_counts(db, models.Skill.type, SKILL_TYPES),
        "reports": _grouped_counts(db, models.Report.status, REPORT_STATUSES),
    }


def list_users(db: Session, skip: int = 0, limit: int = 100, search: Optional[str] = None) -> List[models.User]:
    return user_crud.get_all_users(db, skip, limit, search)
