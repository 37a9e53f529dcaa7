# skillswap/services/review_service.py
"""
Review Service Layer
Business logic for review submission and rating summaries
"""

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional, Dict, Any, List

from skillswap.crud import review as review_crud
from skillswap.crud import swap_request as swap_crud
from skillswap.models.review import Review

logger = logging.getLogger(__name__)


# ======================
# REVIEW SUBMISSION
# ======================

def submit_review(
    db: Session,
    swap_request_id: int,
    reviewer_id: int,
    rating: int,
    comment: Optional[str] = None,
    reviewee_id: Optional[int] = None
) -> Review:
    """
    Submit a review for a completed swap request.

    The reviewee is the other participant of the swap.

    Args:
        db: Database session
        swap_request_id: Swap request identifier
        reviewer_id: Participant writing the review
        rating: Rating value (1-5)
        comment: Optional text comment
        reviewee_id: Optional explicit reviewee, must be the other participant

    Returns:
        Created Review object

    Raises:
        ValueError: If the rating is invalid, the swap is not completed or the
            reviewee is not the other participant
        LookupError: If the swap request does not exist for this reviewer
        IntegrityError: If the reviewer already reviewed this swap request
    """
    # Validate rating range
    if not (1 <= rating <= 5):
        raise ValueError("Rating must be between 1 and 5")

    swap_request = swap_crud.get_swap_request_for_user(db, swap_request_id, reviewer_id)
    if not swap_request:
        raise LookupError("Swap request not found")

    if swap_request.status != "completed":
        raise ValueError("Only completed swaps can be reviewed")

    counterparty_id = swap_request.counterparty_id(reviewer_id)
    if reviewee_id is not None and reviewee_id != counterparty_id:
        raise ValueError("You can only review the other participant of the swap")

    try:
        review = review_crud.create_review(
            db=db,
            swap_request_id=swap_request_id,
            reviewer_id=reviewer_id,
            reviewee_id=counterparty_id,
            rating=rating,
            comment=comment
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            "Duplicate review by user_id=%s for swap request %s",
            reviewer_id, swap_request_id,
        )
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(review)
    logger.info(
        "Review %s submitted: swap=%s reviewer=%s reviewee=%s rating=%s",
        review.id, swap_request_id, reviewer_id, counterparty_id, rating,
    )
    return review


# ======================
# REVIEW RETRIEVAL
# ======================

def get_user_reviews(
    db: Session,
    user_id: int,
    limit: int = 50,
    offset: int = 0
) -> List[Review]:
    """Reviews the user has received, newest first."""
    return review_crud.get_reviews_for_user(db, user_id, limit, offset)


def get_rating_summary(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Get rating summary for a user.

    Args:
        db: Database session
        user_id: Reviewee user ID

    Returns:
        Dictionary with average rating, total reviews and distribution
    """
    average, total = review_crud.calculate_user_rating(db, user_id)
    distribution = review_crud.get_rating_distribution(db, user_id)

    return {
        "user_id": user_id,
        "average_rating": round(average, 2),
        "total_reviews": total,
        "rating_distribution": distribution,
    }
