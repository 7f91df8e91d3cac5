from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=1, max_length=200)
    comment: str = Field(min_length=1)
    stay_duration: str | None = Field(default=None, max_length=50)
    reviewer_name: str = Field(min_length=1, max_length=100)
    reviewer_email: EmailStr


class ReviewerSummary(BaseModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None

    class Config:
        from_attributes = True


class ReviewResponse(BaseModel):
    id: int
    property_id: int
    reviewer_id: int | None = None
    rating: int
    title: str
    comment: str
    stay_duration: str | None = None
    reviewer_name: str
    is_verified: bool
    helpful_count: int
    created_at: datetime | None = None
    reviewer: ReviewerSummary | None = None

    class Config:
        from_attributes = True


class RatingStats(BaseModel):
    average_rating: float
    review_count: int


class ReviewModeration(BaseModel):
    is_verified: bool | None = None
    helpful_count: int | None = Field(default=None, ge=0)
