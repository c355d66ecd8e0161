# backend/routes/admin.py
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from models.attendance import AttendanceRecord
from models.review import ReviewStatus, TrustpilotReview
from models.users import User, UserRole
from schemas.review import ReviewDecision, ReviewOut
from schemas.user import ModeratorList, ModeratorOut, StatusUpdate, SuccessResponse
from utils.audit import log_admin_action
from utils.client import get_client_ip
from utils.exceptions import NotFound, ReviewAlreadyDecided
from utils.tokenJWT import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# Every moderator with their latest attendance read-outs
@router.get("/moderators", response_model=ModeratorList)
def list_moderators(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    moderators = (
        db.query(User)
        .filter(User.role == UserRole.MODERATOR)
        .order_by(User.id.asc())
        .all()
    )

    items = []
    for moderator in moderators:
        latest = (
            db.query(AttendanceRecord)
            .filter(AttendanceRecord.user_id == moderator.id)
            .order_by(AttendanceRecord.date.desc())
            .first()
        )
        item = ModeratorOut.model_validate(moderator)
        if latest is not None:
            item.last_location = latest.location
            item.last_attendance_at = latest.date
        items.append(item)

    return ModeratorList(moderators=items)


# Activate or deactivate a moderator account (audited)
@router.patch("/moderators/{moderator_id}/status", response_model=SuccessResponse)
def update_moderator_status(
    moderator_id: int,
    payload: StatusUpdate,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    moderator = (
        db.query(User)
        .filter(User.id == moderator_id, User.role == UserRole.MODERATOR)
        .first()
    )
    if moderator is None:
        raise NotFound("Moderator not found")

    moderator.is_active = payload.is_active
    moderator.updated_at = datetime.now()

    label = "active" if payload.is_active else "inactive"
    log_admin_action(
        db,
        admin_id=admin.id,
        action=f"{'Activated' if payload.is_active else 'Deactivated'} moderator",
        target_user_id=moderator.id,
        details=f"Changed status to {label}",
        ip=get_client_ip(request),
    )
    db.commit()

    logger.info("Admin %s set moderator %s %s", admin.id, moderator.id, label)
    return SuccessResponse()


# All review submissions, optionally filtered by status
@router.get("/reviews", response_model=List[ReviewOut])
def list_reviews(
    status: Optional[ReviewStatus] = Query(None, description="pending, approved or rejected"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    query = db.query(TrustpilotReview)
    if status is not None:
        query = query.filter(TrustpilotReview.status == status)
    return query.order_by(TrustpilotReview.submitted_at.desc(), TrustpilotReview.id.desc()).all()


def decide_review(
    db: Session,
    review_id: int,
    admin_id: int,
    status: ReviewStatus,
    admin_comments: Optional[str],
    ip: Optional[str] = None,
) -> None:
    """Move a pending review to a terminal state exactly once.

    The status guard lives in the UPDATE itself, so of two concurrent
    decisions only one matches a row. The audit entry is committed in the
    same transaction.
    """
    now = datetime.now()
    updated = (
        db.query(TrustpilotReview)
        .filter(TrustpilotReview.id == review_id, TrustpilotReview.status == ReviewStatus.PENDING)
        .update(
            {
                TrustpilotReview.status: status,
                TrustpilotReview.admin_review_id: admin_id,
                TrustpilotReview.admin_comments: admin_comments,
                TrustpilotReview.reviewed_at: now,
                TrustpilotReview.updated_at: now,
            },
            synchronize_session=False,
        )
    )
    if not updated:
        exists = db.query(TrustpilotReview.id).filter(TrustpilotReview.id == review_id).first()
        db.rollback()
        if exists is None:
            raise NotFound("Review not found")
        raise ReviewAlreadyDecided()

    log_admin_action(
        db,
        admin_id=admin_id,
        action=f"reviewed_trustpilot_review_{status.value}",
        details=f"Review ID: {review_id}, Comments: {admin_comments or 'None'}",
        ip=ip,
    )
    db.commit()


@router.post("/reviews/{review_id}/review", response_model=SuccessResponse)
def review_submission(
    review_id: int,
    payload: ReviewDecision,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    status = ReviewStatus(payload.status)
    try:
        decide_review(db, review_id, admin.id, status, payload.admin_comments, ip=get_client_ip(request))
    except ReviewAlreadyDecided:
        logger.warning("Admin %s tried to re-decide review %s", admin.id, review_id)
        raise

    logger.info("Admin %s %s review %s", admin.id, status.value, review_id)
    return SuccessResponse()
