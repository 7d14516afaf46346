from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.db.models.user import User
from app.schemas.favorite import Favorite, FavoriteStatus
from app.schemas.pagination import PaginatedResponse
from app.services import favorite as favorite_service

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=PaginatedResponse[Favorite])
def list_favorites(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items, total = favorite_service.list_favorites(db, current_user, page=page, page_size=page_size)
    return PaginatedResponse(items=items, total=total, page=page, page_size=page_size)


@router.post(
    "/{apartment_id}",
    response_model=FavoriteStatus,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": FavoriteStatus, "description": "Already a favorite"}},
)
def add_favorite(
    apartment_id: int,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an apartment to favorites. Adding it again is a no-op answered with 200."""
    _, created = favorite_service.add_favorite(db, apartment_id, current_user)
    if not created:
        response.status_code = status.HTTP_200_OK
    return FavoriteStatus(apartment_id=apartment_id, is_favorite=True)


@router.get("/{apartment_id}", response_model=FavoriteStatus)
def check_favorite(
    apartment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return FavoriteStatus(
        apartment_id=apartment_id,
        is_favorite=favorite_service.is_favorite(db, apartment_id, current_user),
    )


@router.delete("/{apartment_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(
    apartment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    favorite_service.remove_favorite(db, apartment_id, current_user)
