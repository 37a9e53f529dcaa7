from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from skillswap.database import get_db
from skillswap.schemas import AnnouncementResponse
from skillswap.services import moderation_service

router = APIRouter(prefix="/announcements", tags=["Announcements"])


@router.get("", response_model=List[AnnouncementResponse])
def get_active_announcements(db: Session = Depends(get_db)):
    """Active, unexpired announcements, newest first"""
    return moderation_service.list_active_announcements(db)
