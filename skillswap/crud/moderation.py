from datetime import datetime
from typing import List, Optional, Set

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from skillswap.models.moderation import Announcement, SkillModeration, UserModeration
from skillswap.utils.clock import utcnow


# ======================
# USER MODERATION
# ======================

def create_user_moderation(
    db: Session,
    *,
    user_id: int,
    moderator_id: Optional[int],
    action: str,
    reason: str,
    expires_at: Optional[datetime] = None,
) -> UserModeration:
    record = UserModeration(
        user_id=user_id,
        moderator_id=moderator_id,
        action=action,
        reason=reason,
        expires_at=expires_at,
        is_active=True,
    )
    db.add(record)
    db.flush()
    return record


def get_user_moderation_history(db: Session, user_id: int) -> List[UserModeration]:
    return (
        db.query(UserModeration)
        .filter(UserModeration.user_id == user_id)
        .order_by(UserModeration.created_at.desc(), UserModeration.id.desc())
        .all()
    )


def _active_ban_filter(now: datetime):
    return (
        UserModeration.action == "ban",
        UserModeration.is_active.is_(True),
        or_(UserModeration.expires_at.is_(None), UserModeration.expires_at > now),
    )


def is_user_banned(db: Session, user_id: int, now: Optional[datetime] = None) -> bool:
    """True when an active ban with no expiry, or an expiry still ahead, exists."""
    now = now or utcnow()
    return db.query(UserModeration.id).filter(
        UserModeration.user_id == user_id,
        *_active_ban_filter(now),
    ).first() is not None


def get_banned_user_ids(db: Session, now: Optional[datetime] = None) -> Set[int]:
    now = now or utcnow()
    rows = db.query(UserModeration.user_id).filter(*_active_ban_filter(now)).distinct().all()
    return {user_id for (user_id,) in rows}


def deactivate_bans(db: Session, user_id: int) -> int:
    updated = db.query(UserModeration).filter(
        UserModeration.user_id == user_id,
        UserModeration.action == "ban",
        UserModeration.is_active.is_(True),
    ).update({"is_active": False}, synchronize_session=False)
    db.flush()
    return int(updated)


# ======================
# SKILL MODERATION
# ======================

def create_skill_moderation(
    db: Session,
    *,
    skill_id: int,
    moderator_id: Optional[int],
    action: str,
    reason: str,
) -> SkillModeration:
    record = SkillModeration(
        skill_id=skill_id,
        moderator_id=moderator_id,
        action=action,
        reason=reason,
    )
    db.add(record)
    db.flush()
    return record


def get_skill_moderation_history(db: Session, skill_id: int) -> List[SkillModeration]:
    return (
        db.query(SkillModeration)
        .filter(SkillModeration.skill_id == skill_id)
        .order_by(SkillModeration.created_at.desc(), SkillModeration.id.desc())
        .all()
    )


def get_rejected_skill_ids(db: Session) -> Set[int]:
    """Skills whose most recent moderation record is a rejection."""
    latest_subq = (
        db.query(func.max(SkillModeration.id).label("latest_id"))
        .group_by(SkillModeration.skill_id)
        .subquery()
    )
    rows = (
        db.query(SkillModeration.skill_id)
        .join(latest_subq, latest_subq.c.latest_id == SkillModeration.id)
        .filter(SkillModeration.action == "reject")
        .all()
    )
    return {skill_id for (skill_id,) in rows}


# ======================
# ANNOUNCEMENTS
# ======================

def create_announcement(db: Session, *, author_id: Optional[int], **fields) -> Announcement:
    announcement = Announcement(author_id=author_id, **fields)
    db.add(announcement)
    db.flush()
    return announcement


def get_announcement(db: Session, announcement_id: int) -> Optional[Announcement]:
    return db.query(Announcement).filter(Announcement.id == announcement_id).first()


def get_all_announcements(db: Session) -> List[Announcement]:
    return db.query(Announcement).order_by(Announcement.created_at.desc(), Announcement.id.desc()).all()


def get_active_announcements(db: Session, now: Optional[datetime] = None) -> List[Announcement]:
    now = now or utcnow()
    return (
        db.query(Announcement)
        .filter(
            Announcement.is_active.is_(True),
            or_(Announcement.expires_at.is_(None), Announcement.expires_at > now),
        )
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        .all()
    )


def update_announcement(db: Session, announcement_id: int, updates: dict) -> Optional[Announcement]:
    announcement = get_announcement(db, announcement_id)
    if not announcement:
        return None
    for key, value in updates.items():
        setattr(announcement, key, value)
    db.flush()
    return announcement


def delete_announcement(db: Session, announcement_id: int) -> bool:
    announcement = get_announcement(db, announcement_id)
    if not announcement:
        return False
    db.delete(announcement)
    db.flush()
    return True
