# skillswap/api/review.py
"""
Review & Rating API Router
REST endpoints for review submission and rating display

Endpoints:
- POST /reviews - Submit a review for a completed swap
- GET /reviews/{user_id} - Reviews a user has received
- GET /reviews/{user_id}/summary - Average rating and distribution
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List

from skillswap.database import get_db
from skillswap.models.user import User
from skillswap.schemas.review import (
    ReviewCreate,
    ReviewResponse,
    RatingSummaryResponse
)
from skillswap.services import review_service
from skillswap.utils.security import get_current_user

router = APIRouter(prefix="/reviews", tags=["reviews"])


# ======================
# SUBMIT REVIEW
# ======================
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def submit_review(
    review: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Submit a review for a completed swap request.

    Requirements:
    - Swap request must be completed
    - User must be a participant of the swap
    - Only one review per user per swap allowed
    - Rating must be 1-5
    """
    try:
        return review_service.submit_review(
            db=db,
            swap_request_id=review.swap_request_id,
            reviewer_id=current_user.id,
            rating=review.rating,
            comment=review.comment,
            reviewee_id=review.reviewee_id
        )

    except LookupError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You have already reviewed this swap"
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


# ======================
# GET USER REVIEWS
# ======================
@router.get("/{user_id}", response_model=List[ReviewResponse])
def get_user_reviews(
    user_id: int,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db)
):
    """
    Get all reviews a user has received (public endpoint), newest first.
    """
    return review_service.get_user_reviews(db=db, user_id=user_id, limit=limit, offset=offset)


# ======================
# GET RATING SUMMARY
# ======================
@router.get("/{user_id}/summary", response_model=RatingSummaryResponse)
def get_rating_summary(
    user_id: int,
    db: Session = Depends(get_db)
):
    """Average rating, total reviews and rating distribution (public endpoint)"""
    return RatingSummaryResponse(**review_service.get_rating_summary(db, user_id))
