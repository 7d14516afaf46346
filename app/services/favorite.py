from sqlalchemy.orm import Session

import app.repositories.apartment as apartment_repo
import app.repositories.favorite as favorite_repo
from app.db.models.favorite import ApartmentFavorite as ApartmentFavoriteModel
from app.db.models.user import User as UserModel
from app.errors import NotFoundError
from app.schemas.apartment import ApartmentCard
from app.schemas.favorite import Favorite


def add_favorite(
    db: Session, apartment_id: int, current_user: UserModel
) -> tuple[ApartmentFavoriteModel, bool]:
    """
    Mark an apartment as a favorite. Idempotent.

    Returns:
        Tuple of (favorite, created) where created is False if it already existed
    """
    if not apartment_repo.get_apartment_by_id(db, apartment_id):
        raise NotFoundError("Apartment not found")

    existing = favorite_repo.get_favorite(db, current_user.id, apartment_id)
    if existing:
        return existing, False
    return favorite_repo.create_favorite(db, current_user.id, apartment_id), True


def remove_favorite(db: Session, apartment_id: int, current_user: UserModel) -> None:
    favorite = favorite_repo.get_favorite(db, current_user.id, apartment_id)
    if not favorite:
        raise NotFoundError("Favorite not found")
    favorite_repo.delete_favorite(db, favorite)


def is_favorite(db: Session, apartment_id: int, current_user: UserModel) -> bool:
    return favorite_repo.get_favorite(db, current_user.id, apartment_id) is not None


def list_favorites(
    db: Session, current_user: UserModel, page: int = 1, page_size: int = 20
) -> tuple[list[Favorite], int]:
    favorites, total = favorite_repo.get_favorites_paginated(
        db, current_user.id, page=page, page_size=page_size
    )
    items = [
        Favorite(
            id=favorite.id,
            apartment_id=favorite.apartment_id,
            added_at=favorite.created_at,
            apartment=ApartmentCard.from_model(favorite.apartment),
        )
        for favorite in favorites
    ]
    return items, total
