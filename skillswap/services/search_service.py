# skillswap/services/search_service.py
"""
Search & Match Service
Finds public, active users by skill name, bio, location, skill type and level.
"""

import logging
from typing import List, Optional, Set

from sqlalchemy import and_, exists, or_
from sqlalchemy.orm import Session, selectinload

from skillswap import models
from skillswap.config import settings
from skillswap.crud import moderation as moderation_crud
from skillswap.models.skill import SKILL_LEVELS, SKILL_TYPES

logger = logging.getLogger(__name__)

ANY = "all"


def _normalize_choice(value: Optional[str], allowed: tuple, label: str) -> Optional[str]:
    """Lowercase a filter value; None or 'all' disables the filter."""
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if not normalized or normalized == ANY:
        return None
    if normalized not in allowed:
        raise ValueError(f"Invalid {label}. Use one of: {', '.join(allowed + (ANY,))}")
    return normalized


def _effective_limit(limit: Optional[int]) -> int:
    if limit is None or limit <= 0:
        return settings.SEARCH_MAX_RESULTS
    return min(limit, settings.SEARCH_MAX_RESULTS)


# ======================
# USER SEARCH
# ======================

def _contains(value: str):
    """ILIKE pattern matching value as a literal substring."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search_users(
    db: Session,
    query: Optional[str] = None,
    location: Optional[str] = None,
    skill_type: Optional[str] = None,
    level: Optional[str] = None,
    limit: Optional[int] = None,
    hidden_skill_ids: Optional[Set[int]] = None,
) -> List[models.User]:
    """
    Search public users that have at least one visible skill.

    Args:
        db: Database session
        query: Matched against skill names and bio (case-insensitive substring)
        location: Case-insensitive substring of the user's location
        skill_type: 'offered', 'wanted' or 'all'
        level: 'beginner', 'intermediate', 'expert' or 'all'
        limit: Maximum number of users, capped by SEARCH_MAX_RESULTS
        hidden_skill_ids: Rejected skill ids, when the caller already loaded them

    Returns:
        Users ordered by most recently updated first

    Raises:
        ValueError: If skill_type or level is not a known value
    """
    skill_type = _normalize_choice(skill_type, SKILL_TYPES, "skill type")
    level = _normalize_choice(level, SKILL_LEVELS, "level")
    needle = (query or "").strip()
    location_needle = (location or "").strip()
    max_results = _effective_limit(limit)

    if hidden_skill_ids is None:
        hidden_skill_ids = moderation_crud.get_rejected_skill_ids(db)
    banned_ids = moderation_crud.get_banned_user_ids(db)

    def has_visible_skill(*criteria):
        conditions = [models.Skill.user_id == models.User.id, *criteria]
        if hidden_skill_ids:
            conditions.append(models.Skill.id.notin_(list(hidden_skill_ids)))
        return exists().where(and_(*conditions))

    q = (
        db.query(models.User)
        .options(selectinload(models.User.skills), selectinload(models.User.availability))
        .filter(models.User.is_public.is_(True))
        .filter(has_visible_skill())
    )

    if banned_ids:
        q = q.filter(models.User.id.notin_(list(banned_ids)))

    if location_needle:
        q = q.filter(models.User.location.ilike(_contains(location_needle), escape="\\"))

    if needle:
        pattern = _contains(needle)
        q = q.filter(or_(
            has_visible_skill(models.Skill.name.ilike(pattern, escape="\\")),
            models.User.bio.ilike(pattern, escape="\\"),
        ))

    # Type and level may be satisfied by different skills
    if skill_type:
        q = q.filter(has_visible_skill(models.Skill.type == skill_type))
    if level:
        q = q.filter(has_visible_skill(models.Skill.level == level))

    results = (
        q.order_by(models.User.updated_at.desc(), models.User.id.desc())
        .limit(max_results)
        .all()
    )

    logger.debug(
        "search q=%r location=%r type=%s level=%s -> %d users",
        query, location, skill_type, level, len(results),
    )
    return results
