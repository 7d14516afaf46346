from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles
from app.db.models.user import User as UserModel
from app.domain import ADMIN
from app.services.user import create_user, get_user, update_user, get_all_users, delete_user
from app.schemas.user import UserCreate, User, UserUpdate
from app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_new_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_roles(ADMIN)),
):
    """
    Create a new user. Only admin users can create users.

    Without role_id the user gets the "user" role; without position_id, position "P0".
    """
    user = create_user(db, user_data)
    return User.model_validate(user)


@router.get("", response_model=PaginatedResponse[User])
def get_all_users_paginated(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    name: str | None = Query(None, description="Filter users by first or last name (partial match)"),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_roles(ADMIN)),
):
    """
    Get all users with pagination. Only admin users can access this endpoint.

    Optional name filter: case-insensitive partial match on first or last name.
    """
    users, total = get_all_users(db, page=page, page_size=page_size, name=name)
    return PaginatedResponse(
        items=[User.model_validate(user) for user in users],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{user_id}", response_model=User)
def get_user_by_id(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    """
    Get a user by ID.

    - Admin can get any user
    - Everyone else can only get themselves
    """
    user = get_user(db, user_id, current_user)
    return User.model_validate(user)


@router.put("/{user_id}", response_model=User)
def update_user_by_id(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    """
    Update a user by ID.

    - Admin can update any user, but cannot change their own role
    - Everyone else can only update their own profile fields
    """
    user = update_user(db, user_id, user_data, current_user)
    return User.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_by_id(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_roles(ADMIN)),
):
    """
    Delete a user by ID. Only admin users can delete users.

    Admins, users with lease requests or payments, and registered apartment
    owners or tenants cannot be deleted.
    """
    delete_user(db, user_id)


# Form-style aliases kept for clients of the original CRUD pages


@router.post("/add", response_model=User, status_code=status.HTTP_201_CREATED)
def add_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_roles(ADMIN)),
):
    """Alias of ``POST /users``."""
    return User.model_validate(create_user(db, user_data))


@router.get("/edit/{user_id}", response_model=User)
def edit_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    """Alias of ``GET /users/{user_id}``: the record an edit form is filled from."""
    return User.model_validate(get_user(db, user_id, current_user))


@router.post("/update/{user_id}", response_model=User)
def post_update_user(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    """Alias of ``PUT /users/{user_id}``."""
    return User.model_validate(update_user(db, user_id, user_data, current_user))


@router.api_route(
    "/delete/{user_id}",
    methods=["GET", "POST"],
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_user_alias(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_roles(ADMIN)),
):
    """Alias of ``DELETE /users/{user_id}``."""
    delete_user(db, user_id)
