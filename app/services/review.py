from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

import app.repositories.apartment as apartment_repo
import app.repositories.review as review_repo
from app.db.models.review import ApartmentReview as ApartmentReviewModel
from app.db.models.user import User as UserModel
from app.errors import DuplicateResourceError, ForbiddenError, NotFoundError
from app.schemas.review import ApartmentReviews, Review, ReviewCreate, ReviewUpdate


def create_review(
    db: Session, apartment_id: int, review_data: ReviewCreate, current_user: UserModel
) -> ApartmentReviewModel:
    """
    Review an apartment the current user lives in or owns.

    Raises:
        NotFoundError: If apartment doesn't exist
        ForbiddenError: If the user is neither the apartment's owner nor its tenant
        DuplicateResourceError: If the user already reviewed this apartment
    """
    apartment = apartment_repo.get_apartment_by_id(db, apartment_id)
    if not apartment:
        raise NotFoundError("Apartment not found")

    if current_user.id not in (apartment.owner_id, apartment.tenant_id):
        raise ForbiddenError("Only the apartment's owner or tenant can review it")

    if review_repo.get_review_by_user_and_apartment(db, current_user.id, apartment_id):
        raise DuplicateResourceError("You have already reviewed this apartment")

    return review_repo.create_review(
        db,
        apartment_id=apartment_id,
        user_id=current_user.id,
        rating=review_data.rating,
        comment=review_data.comment,
    )


def _get_own_review(db: Session, review_id: int, current_user: UserModel) -> ApartmentReviewModel:
    review = review_repo.get_review_by_id(db, review_id)
    if not review:
        raise NotFoundError("Review not found")
    if review.user_id != current_user.id:
        raise ForbiddenError("You can only modify your own reviews")
    return review


def update_review(
    db: Session, review_id: int, review_data: ReviewUpdate, current_user: UserModel
) -> ApartmentReviewModel:
    review = _get_own_review(db, review_id, current_user)
    fields = review_data.model_dump(exclude_unset=True)
    # rating is required on the row
    if "rating" in fields and fields["rating"] is None:
        del fields["rating"]
    return review_repo.update_review(db, review, **fields)


def delete_review(db: Session, review_id: int, current_user: UserModel) -> None:
    review = _get_own_review(db, review_id, current_user)
    review_repo.delete_review(db, review)


def _round_rating(avg) -> float:
    """One decimal, half-up (2.25 -> 2.3). No reviews -> 0.0."""
    if avg is None:
        return 0.0
    return float(Decimal(str(avg)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def list_apartment_reviews(
    db: Session, apartment_id: int, page: int = 1, page_size: int = 20
) -> ApartmentReviews:
    """Public listing of an apartment's reviews with the average rating (0 when unrated)."""
    if not apartment_repo.get_apartment_by_id(db, apartment_id):
        raise NotFoundError("Apartment not found")

    reviews, total = review_repo.get_reviews_by_apartment_paginated(
        db, apartment_id, page=page, page_size=page_size
    )
    avg = review_repo.get_average_rating(db, apartment_id)
    return ApartmentReviews(
        items=[Review.model_validate(r) for r in reviews],
        total=total,
        page=page,
        page_size=page_size,
        total_reviews=total,
        avg_rating=_round_rating(avg),
    )


def list_my_reviews(
    db: Session, current_user: UserModel, page: int = 1, page_size: int = 20
) -> tuple[list[ApartmentReviewModel], int]:
    return review_repo.get_reviews_by_user_paginated(
        db, current_user.id, page=page, page_size=page_size
    )
