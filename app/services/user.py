import logging

from sqlalchemy.orm import Session

import app.repositories.apartment as apartment_repo
import app.repositories.role as role_repo
import app.repositories.user as user_repo
from app.core.security import get_password_hash, validate_password
from app.db.models.user import User as UserModel
from app.domain import ADMIN, USER
from app.errors import (
    DomainValidationError,
    DuplicateResourceError,
    ForbiddenError,
    NotFoundError,
)
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DEFAULT_POSITION_KEY = "P0"

# Columns that cannot be cleared; an explicit null leaves them unchanged
REQUIRED_UPDATE_FIELDS = frozenset(
    {"email", "first_name", "last_name", "gender", "is_active", "role_id"}
)


def _resolve_role_id(db: Session, role_id: int | None) -> int:
    if role_id is None:
        role = role_repo.get_role_by_name(db, USER)
        if not role:
            raise NotFoundError("Default role not found")
        return role.id
    if not role_repo.get_role_by_id(db, role_id):
        raise NotFoundError(f"Role with id {role_id} not found")
    return role_id


def _resolve_position_id(db: Session, position_id: int | None) -> int | None:
    if position_id is None:
        position = role_repo.get_position_by_key(db, DEFAULT_POSITION_KEY)
        return position.id if position else None
    if not role_repo.get_position_by_id(db, position_id):
        raise NotFoundError(f"Position with id {position_id} not found")
    return position_id


def create_user(db: Session, user_data: UserCreate) -> UserModel:
    """
    Create a new user with business logic validation.

    - Validates email uniqueness
    - Validates password requirements
    - Validates role_id and position_id exist (if provided)
    - Defaults to the "user" role and position "P0" when not provided
    """
    existing_user = user_repo.get_user_by_email(db, user_data.email)
    if existing_user:
        raise DuplicateResourceError("Email already registered")

    is_valid, error_message = validate_password(user_data.password)
    if not is_valid:
        raise DomainValidationError(error_message)

    role_id = _resolve_role_id(db, user_data.role_id)
    position_id = _resolve_position_id(db, user_data.position_id)

    fields = user_data.model_dump(exclude={"password", "role_id", "position_id"})
    return user_repo.create_user(
        db,
        **fields,
        password_hash=get_password_hash(user_data.password),
        role_id=role_id,
        position_id=position_id,
    )


def get_user(db: Session, user_id: int, current_user: UserModel) -> UserModel:
    """
    Get a user by ID with authorization checks.

    - Admin can get any user
    - Everyone else can only get themselves

    Raises:
        NotFoundError: If user doesn't exist
        ForbiddenError: If a non-admin tries to access another user
    """
    user = user_repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    if current_user.role.name != ADMIN and current_user.id != user_id:
        raise ForbiddenError("You can only access your own user information")

    return user


def update_user(
    db: Session,
    user_id: int,
    user_data: UserUpdate,
    current_user: UserModel,
) -> UserModel:
    """
    Update a user with authorization checks and business logic validation.

    - Admin can update any user, but cannot change their own role
    - Everyone else can only update themselves and cannot touch role or position
    - No user can change their own role, regardless of their role

    Raises:
        NotFoundError: If user, role or position doesn't exist
        DuplicateResourceError: If email is already taken by another user
        ForbiddenError: If the change is not allowed for the current user
    """
    user = user_repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    is_admin = current_user.role.name == ADMIN

    if not is_admin and current_user.id != user_id:
        raise ForbiddenError("You can only update your own user information")

    if not is_admin and (
        user_data.role_id is not None
        or user_data.position_id is not None
        or user_data.is_active is not None
    ):
        raise ForbiddenError("You cannot modify your role, position or status")

    if current_user.id == user_id and user_data.role_id is not None:
        raise ForbiddenError("You cannot change your own role")

    if user_data.email is not None and user_data.email != user.email:
        existing_user = user_repo.get_user_by_email(db, user_data.email)
        if existing_user:
            raise DuplicateResourceError("Email already registered")

    if user_data.role_id is not None:
        _resolve_role_id(db, user_data.role_id)
    if user_data.position_id is not None:
        _resolve_position_id(db, user_data.position_id)

    fields = {
        name: value
        for name, value in user_data.model_dump(exclude_unset=True).items()
        if value is not None or name not in REQUIRED_UPDATE_FIELDS
    }
    return user_repo.update_user(db, user_id, **fields)


def get_all_users(
    db: Session, page: int = 1, page_size: int = 20, name: str | None = None
) -> tuple[list[UserModel], int]:
    """
    Get all users with pagination.

    This is admin-only functionality, so no authorization checks are needed here
    (authorization is handled at the controller level).
    """
    return user_repo.get_all_users_paginated(db, page=page, page_size=page_size, name=name)


def delete_user(db: Session, user_id: int) -> None:
    """
    Delete a user with business logic validation.

    - Admin users cannot be deleted
    - Users who requested or decided lease requests, or made payments, cannot be deleted
    - Users registered as an apartment's owner or tenant cannot be deleted
    - Cart items, favorites and reviews are removed with the user

    Raises:
        NotFoundError: If user doesn't exist
        DomainValidationError: If any of the rules above forbids the deletion
    """
    user = user_repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    if user.role.name == ADMIN:
        raise DomainValidationError("Cannot delete user: admin users cannot be deleted")

    if user_repo.user_has_lease_requests(db, user_id):
        raise DomainValidationError("Cannot delete user: user has associated lease requests")

    if user_repo.user_has_payments(db, user_id):
        raise DomainValidationError("Cannot delete user: user has associated payments")

    if apartment_repo.get_apartments_linked_to_user(db, user_id):
        raise DomainValidationError(
            "Cannot delete user: user is registered as an apartment owner or tenant"
        )

    user_repo.delete_user(db, user_id)
    logger.info("Deleted user %s", user_id)
