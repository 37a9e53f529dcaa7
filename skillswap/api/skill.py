from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from skillswap import models
from skillswap.crud import skill as skill_crud
from skillswap.database import get_db
from skillswap.schemas import SkillCreate, SkillResponse, SkillUpdate
from skillswap.services import profile_service
from skillswap.utils.security import get_current_user

router = APIRouter(prefix="/skills", tags=["Skills"])


# ======================
# GET: Own skills
# ======================
@router.get("/mine", response_model=List[SkillResponse])
def get_my_skills(
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return skill_crud.get_user_skills(db, current_user.id)


# ======================
# POST: Add skill
# ======================
@router.post("", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
def add_skill(
    payload: SkillCreate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return profile_service.add_skill(db, current_user.id, payload.name, payload.level, payload.type)


# ======================
# PUT: Update own skill
# ======================
@router.put("/{skill_id}", response_model=SkillResponse)
def update_skill(
    skill_id: int,
    payload: SkillUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    try:
        return profile_service.update_skill(db, skill_id, current_user.id, updates)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ======================
# DELETE: Remove own skill
# ======================
@router.delete("/{skill_id}")
def delete_skill(
    skill_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        profile_service.remove_skill(db, skill_id, current_user.id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Skill removed successfully", "skill_id": skill_id}
