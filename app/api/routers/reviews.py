from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.db.models.user import User
from app.schemas.pagination import PaginatedResponse
from app.schemas.review import ApartmentReviews, Review, ReviewCreate, ReviewUpdate
from app.services import review as review_service

router = APIRouter(tags=["reviews"])


@router.get("/apartments/{apartment_id}/reviews", response_model=ApartmentReviews)
def list_apartment_reviews(
    apartment_id: int,
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    db: Session = Depends(get_db),
):
    """Reviews of an apartment, newest first, with the average rating. Public."""
    return review_service.list_apartment_reviews(db, apartment_id, page=page, page_size=page_size)


@router.post(
    "/apartments/{apartment_id}/reviews",
    response_model=Review,
    status_code=status.HTTP_201_CREATED,
)
def create_review(
    apartment_id: int,
    review_data: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Review an apartment. Only its owner or tenant can, once.
    """
    review = review_service.create_review(db, apartment_id, review_data, current_user)
    return Review.model_validate(review)


@router.get("/reviews/me", response_model=PaginatedResponse[Review])
def list_my_reviews(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reviews, total = review_service.list_my_reviews(
        db, current_user, page=page, page_size=page_size
    )
    return PaginatedResponse(
        items=[Review.model_validate(review) for review in reviews],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.put("/reviews/{review_id}", response_model=Review)
def update_review(
    review_id: int,
    review_data: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    review = review_service.update_review(db, review_id, review_data, current_user)
    return Review.model_validate(review)


@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    review_service.delete_review(db, review_id, current_user)
