from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from skillswap import models
from skillswap.database import get_db
from skillswap.schemas import AvailabilitySlotIn, AvailabilitySlotResponse
from skillswap.services import profile_service
from skillswap.utils.security import get_current_user

router = APIRouter(prefix="/availability", tags=["Availability"])


@router.put("", response_model=List[AvailabilitySlotResponse])
def replace_availability(
    slots: List[AvailabilitySlotIn],
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace all of the current user's availability slots."""
    return profile_service.set_user_availability(
        db,
        current_user.id,
        [slot.model_dump() for slot in slots],
    )
