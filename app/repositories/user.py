from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.db.models.lease_request import LeaseRequest as LeaseRequestModel
from app.db.models.payment import Payment as PaymentModel
from app.db.models.user import User as UserModel
from app.errors import NotFoundError


def get_user_by_email(db: Session, email: str) -> UserModel | None:
    """Get a user by email."""
    return db.query(UserModel).filter(UserModel.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> UserModel | None:
    """Get a user by ID."""
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def create_user(db: Session, **fields) -> UserModel:
    """Create a new user in the database. Pure data access - no business logic."""
    db_user = UserModel(**fields)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, user_id: int, **fields) -> UserModel:
    """
    Update user fields. Only updates fields that are explicitly provided.

    To clear a nullable field, explicitly pass it with None value.
    """
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    for field, value in fields.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user


def get_all_users_paginated(
    db: Session, page: int = 1, page_size: int = 20, name: str | None = None
) -> tuple[list[UserModel], int]:
    """
    Get all users with pagination, sorted by last and first name for stable pagination.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        name: Optional case-insensitive partial match on first or last name

    Returns:
        Tuple of (list of users, total count)
    """
    query = db.query(UserModel)
    if name:
        pattern = f"%{name.lower()}%"
        query = query.filter(
            or_(
                func.lower(UserModel.first_name).like(pattern),
                func.lower(UserModel.last_name).like(pattern),
            )
        )
    total = query.count()
    skip = (page - 1) * page_size
    users = (
        query.order_by(UserModel.last_name, UserModel.first_name, UserModel.id)
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return users, total


def user_has_lease_requests(db: Session, user_id: int) -> bool:
    """True if the user requested or decided any lease request."""
    return (
        db.query(LeaseRequestModel.id)
        .filter(
            or_(LeaseRequestModel.user_id == user_id, LeaseRequestModel.decision_by == user_id)
        )
        .first()
        is not None
    )


def user_has_payments(db: Session, user_id: int) -> bool:
    return db.query(PaymentModel.id).filter(PaymentModel.user_id == user_id).first() is not None


def delete_user(db: Session, user_id: int) -> None:
    """Delete a user from the database. Pure data access - no business logic."""
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    db.delete(user)
    db.commit()
