from pydantic import EmailStr, Field, field_validator
from typing import Literal, Optional
from datetime import datetime

from models.review import ReviewStatus
from schemas.base import CamelModel

# Moderator submission of a customer review draft
class ReviewCreate(CamelModel):
    customer_name: str = Field(min_length=1, max_length=200)
    customer_email: EmailStr
    rating: int = Field(ge=1, le=5)
    review_text: str = Field(min_length=1)
    business_response: Optional[str] = None

    @field_validator("customer_name", "review_text")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

class ReviewOut(CamelModel):
    id: int
    moderator_id: int
    customer_name: str
    customer_email: str
    rating: int
    review_text: str
    business_response: Optional[str] = None
    status: ReviewStatus
    admin_review_id: Optional[int] = None
    admin_comments: Optional[str] = None
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None

class ReviewSubmitResponse(CamelModel):
    success: bool = True
    review: ReviewOut

# Admin decision; only terminal states are accepted
class ReviewDecision(CamelModel):
    status: Literal["approved", "rejected"]
    admin_comments: Optional[str] = None
