from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from skillswap.crud import moderation as moderation_crud
from skillswap.database import get_db
from skillswap.schemas import PublicProfile
from skillswap.services import search_service

router = APIRouter(prefix="/users", tags=["Search"])


# ======================
# GET: Search users by skill, bio, location, type and level
# ======================
@router.get("/search", response_model=List[PublicProfile])
def search_users(
    q: Optional[str] = Query(None, description="Skill name or bio text"),
    location: Optional[str] = None,
    skill_type: Optional[str] = Query(None, alias="skillType", description="offered, wanted or all"),
    level: Optional[str] = Query(None, description="beginner, intermediate, expert or all"),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    hidden = moderation_crud.get_rejected_skill_ids(db)
    try:
        users = search_service.search_users(
            db,
            query=q,
            location=location,
            skill_type=skill_type,
            level=level,
            limit=limit,
            hidden_skill_ids=hidden,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    results = []
    for user in users:
        profile = PublicProfile.model_validate(user)
        profile.skills = [s for s in profile.skills if s.id not in hidden]
        results.append(profile)
    return results
