# skillswap/services/swap_service.py
"""
Swap Request Lifecycle Service
Creation, status transitions and participant-scoped reads for swap requests.

State machine:
    pending  -> accepted   (receiver)
    pending  -> rejected   (receiver)
    pending  -> cancelled  (requester or receiver)
    accepted -> completed  (requester or receiver)
    accepted -> cancelled  (requester or receiver)

completed, rejected and cancelled are terminal.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from skillswap import models
from skillswap.crud import skill as skill_crud
from skillswap.crud import swap_request as swap_crud
from skillswap.crud import user as user_crud
from skillswap.models.swap_request import SWAP_STATUSES
from skillswap.utils.clock import utcnow

logger = logging.getLogger(__name__)

REQUESTER = "requester"
RECEIVER = "receiver"

# (from, to) -> roles allowed to make the move
ALLOWED_TRANSITIONS = {
    ("pending", "accepted"): {RECEIVER},
    ("pending", "rejected"): {RECEIVER},
    ("pending", "cancelled"): {REQUESTER, RECEIVER},
    ("accepted", "completed"): {REQUESTER, RECEIVER},
    ("accepted", "cancelled"): {REQUESTER, RECEIVER},
}


# ======================
# HELPER FUNCTIONS
# ======================

def _role_of(swap_request: models.SwapRequest, user_id: int) -> Optional[str]:
    if swap_request.requester_id == user_id:
        return REQUESTER
    if swap_request.receiver_id == user_id:
        return RECEIVER
    return None


# ======================
# CREATE SWAP REQUEST
# ======================

def create_swap_request(
    db: Session,
    requester_id: int,
    receiver_id: int,
    offered_skill_id: Optional[int] = None,
    requested_skill_id: Optional[int] = None,
    message: Optional[str] = None,
    proposed_time: Optional[datetime] = None,
) -> models.SwapRequest:
    """
    Create a pending swap request from requester to receiver.

    Raises:
        ValueError: If the receiver is missing, is the requester, or a skill
            does not belong to the expected party
    """
    if requester_id == receiver_id:
        logger.warning("user_id=%s tried to send a swap request to themselves", requester_id)
        raise ValueError("You cannot send a swap request to yourself")

    receiver = user_crud.get_user(db, receiver_id)
    if not receiver:
        raise ValueError("Receiver not found")

    if offered_skill_id is not None and not skill_crud.get_user_skill(db, offered_skill_id, requester_id):
        raise ValueError("Offered skill must be one of your skills")

    if requested_skill_id is not None and not skill_crud.get_user_skill(db, requested_skill_id, receiver_id):
        raise ValueError("Requested skill must belong to the receiver")

    try:
        swap_request = swap_crud.create_swap_request(
            db,
            requester_id=requester_id,
            receiver_id=receiver_id,
            offered_skill_id=offered_skill_id,
            requested_skill_id=requested_skill_id,
            message=message,
            proposed_time=proposed_time,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Swap request %s created: requester=%s receiver=%s",
        swap_request.id, requester_id, receiver_id,
    )
    return swap_crud.get_swap_request(db, swap_request.id)


# ======================
# STATUS TRANSITIONS
# ======================

def update_swap_status(
    db: Session,
    request_id: int,
    new_status: str,
    acting_user_id: int,
) -> models.SwapRequest:
    """
    Move a swap request to a new status.

    Raises:
        LookupError: If no request with this id involves the acting user
        ValueError: If the status is unknown or the transition is not allowed
        PermissionError: If the acting user's role may not make this transition
    """
    swap_request = swap_crud.get_swap_request_for_user(db, request_id, acting_user_id)
    if not swap_request:
        raise LookupError("Swap request not found")

    new_status = (new_status or "").strip().lower()
    if new_status not in SWAP_STATUSES:
        raise ValueError(f"Invalid status. Use one of: {', '.join(SWAP_STATUSES)}")

    current = swap_request.status
    allowed_roles = ALLOWED_TRANSITIONS.get((current, new_status))
    if allowed_roles is None:
        logger.warning(
            "Rejected transition %s -> %s on swap request %s",
            current, new_status, request_id,
        )
        raise ValueError(f"Cannot change status from {current} to {new_status}")

    role = _role_of(swap_request, acting_user_id)
    if role not in allowed_roles:
        logger.warning(
            "user_id=%s (%s) may not move swap request %s to %s",
            acting_user_id, role, request_id, new_status,
        )
        raise PermissionError(f"Only the receiver can mark a request as {new_status}")

    try:
        swap_request.status = new_status
        swap_request.updated_at = utcnow()
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Swap request %s: %s -> %s by user_id=%s",
        request_id, current, new_status, acting_user_id,
    )
    return swap_crud.get_swap_request(db, request_id)


# ======================
# READS
# ======================

def list_user_swap_requests(db: Session, user_id: int, status: Optional[str] = None) -> List[models.SwapRequest]:
    if status:
        status = status.strip().lower()
        if status not in SWAP_STATUSES:
            raise ValueError(f"Invalid status. Use one of: {', '.join(SWAP_STATUSES)}")
    return swap_crud.get_user_swap_requests(db, user_id, status)


def get_swap_request_for_user(db: Session, request_id: int, user_id: int) -> models.SwapRequest:
    swap_request = swap_crud.get_swap_request_for_user(db, request_id, user_id)
    if not swap_request:
        raise LookupError("Swap request not found")
    return swap_request


def list_all_swap_requests(
    db: Session,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.SwapRequest]:
    if status:
        status = status.strip().lower()
        if status not in SWAP_STATUSES:
            raise ValueError(f"Invalid status. Use one of: {', '.join(SWAP_STATUSES)}")
    return swap_crud.get_all_swap_requests(db, status, skip, limit)
