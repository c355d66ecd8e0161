# backend/models/review.py
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Moderation states; approved and rejected are terminal
class ReviewStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

# Customer review drafted by a moderator and decided by an admin
class TrustpilotReview(Base):
    __tablename__ = "trustpilot_reviews"

    id = Column(Integer, primary_key=True, index=True)
    moderator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    review_text = Column(Text, nullable=False)
    business_response = Column(Text, nullable=True)

    status = Column(
        Enum(ReviewStatus, name="reviewstatus", native_enum=False, create_constraint=True, values_callable=lambda e: [m.value for m in e]),
        default=ReviewStatus.PENDING,
        nullable=False,
        index=True,
    )
    admin_review_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    admin_comments = Column(Text, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    submitted_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now)

    moderator = relationship("User", foreign_keys=[moderator_id])
    admin_reviewer = relationship("User", foreign_keys=[admin_review_id])

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )
