from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.review import ApartmentReview as ApartmentReviewModel


def get_review_by_id(db: Session, review_id: int) -> ApartmentReviewModel | None:
    return db.query(ApartmentReviewModel).filter(ApartmentReviewModel.id == review_id).first()


def get_review_by_user_and_apartment(
    db: Session, user_id: int, apartment_id: int
) -> ApartmentReviewModel | None:
    return (
        db.query(ApartmentReviewModel)
        .filter(
            ApartmentReviewModel.user_id == user_id,
            ApartmentReviewModel.apartment_id == apartment_id,
        )
        .first()
    )


def _paginate(query, page: int, page_size: int) -> tuple[list[ApartmentReviewModel], int]:
    total = query.count()
    skip = (page - 1) * page_size
    reviews = (
        query.order_by(ApartmentReviewModel.created_at.desc(), ApartmentReviewModel.id.desc())
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return reviews, total


def get_reviews_by_apartment_paginated(
    db: Session, apartment_id: int, page: int = 1, page_size: int = 20
) -> tuple[list[ApartmentReviewModel], int]:
    query = db.query(ApartmentReviewModel).filter(
        ApartmentReviewModel.apartment_id == apartment_id
    )
    return _paginate(query, page, page_size)


def get_reviews_by_user_paginated(
    db: Session, user_id: int, page: int = 1, page_size: int = 20
) -> tuple[list[ApartmentReviewModel], int]:
    query = db.query(ApartmentReviewModel).filter(ApartmentReviewModel.user_id == user_id)
    return _paginate(query, page, page_size)


def get_average_rating(db: Session, apartment_id: int) -> float | None:
    """Mean rating over all reviews of an apartment, or None when it has none."""
    avg = (
        db.query(func.avg(ApartmentReviewModel.rating))
        .filter(ApartmentReviewModel.apartment_id == apartment_id)
        .scalar()
    )
    return float(avg) if avg is not None else None


def create_review(db: Session, **fields) -> ApartmentReviewModel:
    """Create a new review in the database. Pure data access - no business logic."""
    db_review = ApartmentReviewModel(**fields)
    db.add(db_review)
    db.commit()
    db.refresh(db_review)
    return db_review


def update_review(db: Session, review: ApartmentReviewModel, **fields) -> ApartmentReviewModel:
    for field, value in fields.items():
        setattr(review, field, value)
    db.commit()
    db.refresh(review)
    return review


def delete_review(db: Session, review: ApartmentReviewModel) -> None:
    db.delete(review)
    db.commit()
