# skillswap/crud/review.py
"""
Review CRUD Operations
Core database operations for ratings and reviews
"""

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func
from typing import Optional, List

from skillswap.models.review import Review


# ======================
# REVIEW CRUD
# ======================

def create_review(
    db: Session,
    swap_request_id: int,
    reviewer_id: int,
    reviewee_id: int,
    rating: int,
    comment: Optional[str] = None
) -> Review:
    """
    Create a new review for a swap request.

    Args:
        db: Database session
        swap_request_id: Swap request identifier
        reviewer_id: User writing the review
        reviewee_id: User being reviewed
        rating: Rating value (1-5)
        comment: Optional text comment

    Returns:
        Created Review object

    Raises:
        ValueError: If rating is out of range
        IntegrityError: If the reviewer already reviewed this swap request
    """
    if not (1 <= rating <= 5):
        raise ValueError("Rating must be between 1 and 5")

    review = Review(
        swap_request_id=swap_request_id,
        reviewer_id=reviewer_id,
        reviewee_id=reviewee_id,
        rating=rating,
        comment=comment
    )

    db.add(review)
    db.flush()
    return review


def get_reviews_for_user(
    db: Session,
    user_id: int,
    limit: int = 50,
    offset: int = 0
) -> List[Review]:
    """
    Get all reviews a user has received, newest first.

    Args:
        db: Database session
        user_id: Reviewee user ID
        limit: Maximum reviews to return
        offset: Number of reviews to skip

    Returns:
        List of Review objects
    """
    return (
        db.query(Review)
        .options(selectinload(Review.reviewer))
        .filter(Review.reviewee_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


# ======================
# RATING AGGREGATES
# ======================

def calculate_user_rating(db: Session, user_id: int) -> tuple[float, int]:
    """
    Calculate average rating and total reviews received by a user.

    Returns:
        Tuple of (average_rating, total_reviews)
    """
    result = db.query(
        func.avg(Review.rating).label('avg_rating'),
        func.count(Review.id).label('total')
    ).filter(
        Review.reviewee_id == user_id
    ).first()

    avg_rating = float(result.avg_rating) if result.avg_rating else 0.0
    total = int(result.total) if result.total else 0

    return (avg_rating, total)


def get_rating_distribution(db: Session, user_id: int) -> dict:
    """
    Get distribution of ratings received by a user.

    Returns:
        Dictionary with rating counts: {1: count, 2: count, ...}
    """
    distribution = {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}

    results = db.query(
        Review.rating,
        func.count(Review.id).label('count')
    ).filter(
        Review.reviewee_id == user_id
    ).group_by(
        Review.rating
    ).all()

    for rating, count in results:
        distribution[rating] = count

    return distribution
