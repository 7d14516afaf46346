from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.pagination import PaginatedResponse


class Review(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apartment_id: int
    user_id: int
    rating: int
    comment: str | None = None
    created_at: datetime
    updated_at: datetime


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    comment: str | None = Field(None, max_length=2000)


class ReviewUpdate(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = Field(None, max_length=2000)


class ApartmentReviews(PaginatedResponse[Review]):
    avg_rating: float
    total_reviews: int
