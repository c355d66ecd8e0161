# backend/routes/reviews.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.review import ReviewStatus, TrustpilotReview
from models.users import User
from schemas.review import ReviewCreate, ReviewOut, ReviewSubmitResponse
from utils.exceptions import NotFound
from utils.tokenJWT import require_auth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


# Create a new review draft awaiting admin moderation
@router.post("/submit", response_model=ReviewSubmitResponse)
def submit_review(
    payload: ReviewCreate,
    user_id: int = Depends(require_auth),
    db: Session = Depends(get_db),
):
    review = TrustpilotReview(
        moderator_id=user_id,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        rating=payload.rating,
        review_text=payload.review_text,
        business_response=payload.business_response,
        status=ReviewStatus.PENDING,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    logger.info("Review %s submitted by user %s", review.id, user_id)
    return {"success": True, "review": review}


# Reviews submitted by the caller, newest first
@router.get("/my-reviews", response_model=List[ReviewOut])
def my_reviews(user_id: int = Depends(require_auth), db: Session = Depends(get_db)):
    return (
        db.query(TrustpilotReview)
        .filter(TrustpilotReview.moderator_id == user_id)
        .order_by(TrustpilotReview.submitted_at.desc(), TrustpilotReview.id.desc())
        .all()
    )


# Single review; moderators only see their own submissions
@router.get("/{review_id}", response_model=ReviewOut)
def get_review(review_id: int, user_id: int = Depends(require_auth), db: Session = Depends(get_db)):
    review = db.query(TrustpilotReview).filter(TrustpilotReview.id == review_id).first()
    if review is None:
        raise NotFound("Review not found")

    if review.moderator_id != user_id:
        viewer = db.query(User).filter(User.id == user_id).first()
        if viewer is None or not viewer.is_admin:
            raise NotFound("Review not found")
    return review
