from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from skillswap import models
from skillswap.utils.clock import utcnow


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email.strip().lower()).first()


def get_user_with_skills(db: Session, user_id: int) -> Optional[models.User]:
    return (
        db.query(models.User)
        .options(selectinload(models.User.skills), selectinload(models.User.availability))
        .filter(models.User.id == user_id)
        .first()
    )


def get_all_users(db: Session, skip: int = 0, limit: int = 100, search: Optional[str] = None) -> List[models.User]:
    query = db.query(models.User)
    if search:
        like = f"%{search.strip()}%"
        query = query.filter(
            or_(
                models.User.first_name.ilike(like),
                models.User.last_name.ilike(like),
                models.User.email.ilike(like),
            )
        )
    return (
        query
        .order_by(models.User.first_name.asc(), models.User.last_name.asc(), models.User.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def create_user(
    db: Session,
    *,
    email: str,
    password_hash: str,
    first_name: str,
    last_name: str,
    bio: Optional[str] = None,
    location: Optional[str] = None,
    is_admin: bool = False,
) -> models.User:
    user = models.User(
        email=email.strip().lower(),
        password_hash=password_hash,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        bio=bio,
        location=location,
        is_public=True,
        is_admin=is_admin,
    )
    db.add(user)
    db.flush()
    return user


def update_user_profile(db: Session, user: models.User, updates: dict) -> models.User:
    for key, value in updates.items():
        setattr(user, key, value)
    user.updated_at = utcnow()
    db.flush()
    return user


def touch_last_active(db: Session, user: models.User) -> None:
    user.last_active_at = utcnow()
    db.flush()
