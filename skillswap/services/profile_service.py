# skillswap/services/profile_service.py
"""
Profile, Skills & Availability Service
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from skillswap import models
from skillswap.crud import availability as availability_crud
from skillswap.crud import skill as skill_crud
from skillswap.crud import user as user_crud

logger = logging.getLogger(__name__)


# ======================
# PROFILE
# ======================

def update_profile(db: Session, user: models.User, updates: Dict[str, Any]) -> models.User:
    try:
        user_crud.update_user_profile(db, user, updates)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("Profile updated for user_id=%s fields=%s", user.id, sorted(updates))
    return user


def get_public_profile(db: Session, user_id: int, viewer_id: Optional[int] = None) -> models.User:
    """Private profiles are only visible to their owner."""
    user = user_crud.get_user_with_skills(db, user_id)
    if not user or (not user.is_public and user.id != viewer_id):
        raise LookupError("User not found")
    return user


# ======================
# SKILLS
# ======================

def add_skill(db: Session, user_id: int, name: str, level: str, type: str) -> models.Skill:
    try:
        skill = skill_crud.create_skill(db, user_id, name, level, type)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(skill)
    logger.info("Skill %s (%s, %s) added for user_id=%s", skill.id, type, level, user_id)
    return skill


def update_skill(db: Session, skill_id: int, user_id: int, updates: Dict[str, Any]) -> models.Skill:
    try:
        skill = skill_crud.update_skill(db, skill_id, user_id, updates)
        if not skill:
            raise LookupError("Skill not found")
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(skill)
    return skill


def remove_skill(db: Session, skill_id: int, user_id: int) -> None:
    try:
        if not skill_crud.delete_skill(db, skill_id, user_id):
            raise LookupError("Skill not found")
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Skill %s removed by user_id=%s", skill_id, user_id)


# ======================
# AVAILABILITY
# ======================

def set_user_availability(db: Session, user_id: int, slots: Iterable[Dict[str, Any]]) -> List[models.AvailabilitySlot]:
    """
    Replace a user's availability with the given slots.

    Existing slots are deleted and the new ones inserted in one commit, so
    submitting the same slots twice leaves the same set behind.
    """
    slots = list(slots)
    try:
        removed = availability_crud.delete_user_availability(db, user_id)
        availability_crud.add_availability_slots(db, user_id, slots)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Availability replaced for user_id=%s (%d removed, %d added)", user_id, removed, len(slots))
    return availability_crud.get_user_availability(db, user_id)


def get_user_availability(db: Session, user_id: int) -> List[models.AvailabilitySlot]:
    return availability_crud.get_user_availability(db, user_id)
