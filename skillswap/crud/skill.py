from typing import List, Optional

from sqlalchemy.orm import Session

from skillswap import models


def create_skill(db: Session, user_id: int, name: str, level: str, type: str) -> models.Skill:
    skill = models.Skill(user_id=user_id, name=name, level=level, type=type)
    db.add(skill)
    db.flush()
    return skill


def get_skill(db: Session, skill_id: int) -> Optional[models.Skill]:
    return db.query(models.Skill).filter(models.Skill.id == skill_id).first()


def get_user_skill(db: Session, skill_id: int, user_id: int) -> Optional[models.Skill]:
    return db.query(models.Skill).filter(
        models.Skill.id == skill_id,
        models.Skill.user_id == user_id,
    ).first()


def get_user_skills(db: Session, user_id: int, skill_type: Optional[str] = None) -> List[models.Skill]:
    query = db.query(models.Skill).filter(models.Skill.user_id == user_id)
    if skill_type:
        query = query.filter(models.Skill.type == skill_type)
    return query.order_by(models.Skill.id.asc()).all()


def update_skill(db: Session, skill_id: int, user_id: int, updates: dict) -> Optional[models.Skill]:
    skill = get_user_skill(db, skill_id, user_id)
    if not skill:
        return None
    for key, value in updates.items():
        setattr(skill, key, value)
    db.flush()
    return skill


def delete_skill(db: Session, skill_id: int, user_id: int) -> bool:
    skill = get_user_skill(db, skill_id, user_id)
    if not skill:
        return False
    db.delete(skill)
    db.flush()
    return True
