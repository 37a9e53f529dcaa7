from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from skillswap import models

_DETAIL_OPTIONS = (
    selectinload(models.SwapRequest.requester),
    selectinload(models.SwapRequest.receiver),
    selectinload(models.SwapRequest.offered_skill),
    selectinload(models.SwapRequest.requested_skill),
    selectinload(models.SwapRequest.reviews),
)


def create_swap_request(
    db: Session,
    *,
    requester_id: int,
    receiver_id: int,
    offered_skill_id: Optional[int] = None,
    requested_skill_id: Optional[int] = None,
    message: Optional[str] = None,
    proposed_time: Optional[datetime] = None,
) -> models.SwapRequest:
    swap_request = models.SwapRequest(
        requester_id=requester_id,
        receiver_id=receiver_id,
        offered_skill_id=offered_skill_id,
        requested_skill_id=requested_skill_id,
        message=message,
        proposed_time=proposed_time,
        status="pending",
    )
    db.add(swap_request)
    db.flush()
    return swap_request


def get_swap_request(db: Session, request_id: int) -> Optional[models.SwapRequest]:
    return (
        db.query(models.SwapRequest)
        .options(*_DETAIL_OPTIONS)
        .filter(models.SwapRequest.id == request_id)
        .first()
    )


def get_swap_request_for_user(db: Session, request_id: int, user_id: int) -> Optional[models.SwapRequest]:
    """Return the request only when the user is its requester or receiver."""
    return (
        db.query(models.SwapRequest)
        .options(*_DETAIL_OPTIONS)
        .filter(
            models.SwapRequest.id == request_id,
            or_(
                models.SwapRequest.requester_id == user_id,
                models.SwapRequest.receiver_id == user_id,
            ),
        )
        .first()
    )


def get_user_swap_requests(db: Session, user_id: int, status: Optional[str] = None) -> List[models.SwapRequest]:
    query = (
        db.query(models.SwapRequest)
        .options(*_DETAIL_OPTIONS)
        .filter(
            or_(
                models.SwapRequest.requester_id == user_id,
                models.SwapRequest.receiver_id == user_id,
            )
        )
    )
    if status:
        query = query.filter(models.SwapRequest.status == status)
    return query.order_by(models.SwapRequest.created_at.desc(), models.SwapRequest.id.desc()).all()


def get_all_swap_requests(
    db: Session,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.SwapRequest]:
    query = db.query(models.SwapRequest).options(*_DETAIL_OPTIONS)
    if status:
        query = query.filter(models.SwapRequest.status == status)
    return (
        query.order_by(models.SwapRequest.created_at.desc(), models.SwapRequest.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_by_status(db: Session, status: str) -> int:
    return db.query(models.SwapRequest).filter(models.SwapRequest.status == status).count()
