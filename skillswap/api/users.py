from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from skillswap import models
from skillswap.crud import moderation as moderation_crud
from skillswap.database import get_db
from skillswap.schemas import AvailabilitySlotResponse, ProfileUpdate, PublicProfile, SkillResponse, UserResponse
from skillswap.services import profile_service
from skillswap.utils.security import get_current_user, get_optional_user

router = APIRouter(prefix="/users", tags=["Users"])


def _viewer_id(viewer: Optional[models.User]) -> Optional[int]:
    return viewer.id if viewer else None


# ======================
# PUT/PATCH: Update own profile
# ======================
@router.put("/profile", response_model=UserResponse)
@router.patch("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return profile_service.update_profile(db, current_user, payload.model_dump(exclude_unset=True))


# ======================
# GET: Public profile
# ======================
@router.get("/{user_id}", response_model=PublicProfile)
def get_user_profile(
    user_id: int,
    viewer: Optional[models.User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        user = profile_service.get_public_profile(db, user_id, viewer_id=_viewer_id(viewer))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    hidden = moderation_crud.get_rejected_skill_ids(db)
    profile = PublicProfile.model_validate(user)
    profile.skills = [s for s in profile.skills if s.id not in hidden]
    return profile


@router.get("/{user_id}/skills", response_model=List[SkillResponse])
def get_user_skills(
    user_id: int,
    skill_type: Optional[str] = None,
    viewer: Optional[models.User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        user = profile_service.get_public_profile(db, user_id, viewer_id=_viewer_id(viewer))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    hidden = moderation_crud.get_rejected_skill_ids(db)
    skills = sorted(user.skills, key=lambda s: s.id)
    return [
        s for s in skills
        if s.id not in hidden and (not skill_type or s.type == skill_type.strip().lower())
    ]


@router.get("/{user_id}/availability", response_model=List[AvailabilitySlotResponse])
def get_user_availability(
    user_id: int,
    viewer: Optional[models.User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    try:
        profile_service.get_public_profile(db, user_id, viewer_id=_viewer_id(viewer))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return profile_service.get_user_availability(db, user_id)
