"""
Swap Request API
Create swap requests and move them through their lifecycle.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from skillswap import models
from skillswap.database import get_db
from skillswap.schemas import SwapRequestCreate, SwapRequestDetail, SwapStatusUpdate
from skillswap.services import swap_service
from skillswap.utils.security import get_current_user

router = APIRouter(prefix="/swap-requests", tags=["Swap Requests"])


# ======================
# SWAP REQUEST LISTING
# ======================
@router.get("", response_model=List[SwapRequestDetail])
def get_swap_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get all swap requests the current user sent or received, newest first"""
    try:
        return swap_service.list_user_swap_requests(db, current_user.id, status_filter)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{request_id}", response_model=SwapRequestDetail)
def get_swap_request(
    request_id: int,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return swap_service.get_swap_request_for_user(db, request_id, current_user.id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ======================
# CREATE SWAP REQUEST
# ======================
@router.post("", response_model=SwapRequestDetail, status_code=status.HTTP_201_CREATED)
def create_swap_request(
    payload: SwapRequestCreate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return swap_service.create_swap_request(
            db,
            requester_id=current_user.id,
            receiver_id=payload.receiver_id,
            offered_skill_id=payload.offered_skill_id,
            requested_skill_id=payload.requested_skill_id,
            message=payload.message,
            proposed_time=payload.proposed_time,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ======================
# STATUS UPDATES
# ======================
@router.put("/{request_id}/status", response_model=SwapRequestDetail)
@router.patch("/{request_id}/status", response_model=SwapRequestDetail)
def update_swap_request_status(
    request_id: int,
    payload: SwapStatusUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Accept, reject, complete or cancel a swap request.

    Only the receiver may accept or reject; either party may complete an
    accepted swap or cancel a pending or accepted one.
    """
    try:
        return swap_service.update_swap_status(db, request_id, payload.status, current_user.id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
