# skillswap/api/admin.py
"""
Admin Module
Admin-only endpoints for platform statistics, user and skill moderation,
swap request oversight, content reports and announcements.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional, List

from skillswap.database import get_db
from skillswap.models.user import User
from skillswap.schemas import (
    ActivityReport,
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
    PlatformStats,
    ReportResponse,
    ReportStatusUpdate,
    SkillModerationRequest,
    SkillModerationResponse,
    SwapRequestDetail,
    UserModerationRequest,
    UserModerationResponse,
    UserResponse,
)
from skillswap.services import moderation_service, report_service, swap_service
from skillswap.utils.security import require_admin

router = APIRouter(prefix="/admin", tags=["Admin"])


# ─────────────────────────────────────────
# GET /admin/stats: Dashboard overview
# ─────────────────────────────────────────
@router.get("/stats", response_model=PlatformStats)
def get_dashboard_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return moderation_service.get_platform_stats(db)


# ─────────────────────────────────────────
# GET /admin/activity-report: Aggregate counts
# ─────────────────────────────────────────
@router.get("/activity-report", response_model=ActivityReport)
def get_activity_report(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return moderation_service.get_activity_report(db)


# ─────────────────────────────────────────
# GET /admin/users: List all users
# ─────────────────────────────────────────
@router.get("/users", response_model=List[UserResponse])
def get_all_users(
    search: Optional[str] = Query(None, description="Search by name or email"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return moderation_service.list_users(db, skip=skip, limit=limit, search=search)


# ─────────────────────────────────────────
# POST /admin/users/{user_id}/moderate
# ─────────────────────────────────────────
@router.post("/users/{user_id}/moderate", response_model=UserModerationResponse, status_code=status.HTTP_201_CREATED)
def moderate_user(
    user_id: int,
    payload: UserModerationRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return moderation_service.moderate_user(
            db,
            user_id=user_id,
            moderator_id=admin.id,
            action=payload.action,
            reason=payload.reason,
            duration_days=payload.duration_days,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ─────────────────────────────────────────
# POST /admin/users/{user_id}/lift-ban
# ─────────────────────────────────────────
@router.post("/users/{user_id}/lift-ban")
def lift_ban(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        lifted = moderation_service.lift_ban(db, user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not lifted:
        return {"message": "User has no active ban", "user_id": user_id, "lifted": 0}
    return {"message": "Ban lifted", "user_id": user_id, "lifted": lifted}


# ─────────────────────────────────────────
# GET /admin/users/{user_id}/moderation: History
# ─────────────────────────────────────────
@router.get("/users/{user_id}/moderation", response_model=List[UserModerationResponse])
def get_user_moderation_history(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return moderation_service.get_user_moderation_history(db, user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ─────────────────────────────────────────
# POST /admin/skills/{skill_id}/moderate
# ─────────────────────────────────────────
@router.post("/skills/{skill_id}/moderate", response_model=SkillModerationResponse, status_code=status.HTTP_201_CREATED)
def moderate_skill(
    skill_id: int,
    payload: SkillModerationRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return moderation_service.moderate_skill(
            db,
            skill_id=skill_id,
            moderator_id=admin.id,
            action=payload.action,
            reason=payload.reason,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/skills/{skill_id}/moderation", response_model=List[SkillModerationResponse])
def get_skill_moderation_history(
    skill_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return moderation_service.get_skill_moderation_history(db, skill_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ─────────────────────────────────────────
# GET /admin/swap-requests: All swap requests
# ─────────────────────────────────────────
@router.get("/swap-requests", response_model=List[SwapRequestDetail])
def get_all_swap_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return swap_service.list_all_swap_requests(db, status_filter, skip, limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ─────────────────────────────────────────
# GET /admin/reports: Content reports queue
# ─────────────────────────────────────────
@router.get("/reports", response_model=List[ReportResponse])
def get_reports(
    status_filter: Optional[str] = Query("pending", alias="status", description="pending | reviewed | resolved"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    normalized = status_filter.strip().lower() if status_filter else None
    try:
        return report_service.list_reports(db, normalized, skip, limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ─────────────────────────────────────────
# PUT /admin/reports/{report_id}
# ─────────────────────────────────────────
@router.put("/reports/{report_id}", response_model=ReportResponse)
def update_report_status(
    report_id: int,
    payload: ReportStatusUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return report_service.update_report_status(db, report_id, payload.status)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ─────────────────────────────────────────
# Announcements
# ─────────────────────────────────────────
@router.get("/announcements", response_model=List[AnnouncementResponse])
def get_announcements(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return moderation_service.list_announcements(db)


@router.post("/announcements", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
def create_announcement(
    payload: AnnouncementCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return moderation_service.create_announcement(db, admin.id, payload.model_dump())


@router.put("/announcements/{announcement_id}", response_model=AnnouncementResponse)
def update_announcement(
    announcement_id: int,
    payload: AnnouncementUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return moderation_service.update_announcement(
            db, announcement_id, payload.model_dump(exclude_unset=True)
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/announcements/{announcement_id}")
def delete_announcement(
    announcement_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        moderation_service.delete_announcement(db, announcement_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Announcement deleted", "announcement_id": announcement_id}
