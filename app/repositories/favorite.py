from sqlalchemy.orm import Session, joinedload

from app.db.models.favorite import ApartmentFavorite as ApartmentFavoriteModel


def get_favorite(db: Session, user_id: int, apartment_id: int) -> ApartmentFavoriteModel | None:
    return (
        db.query(ApartmentFavoriteModel)
        .filter(
            ApartmentFavoriteModel.user_id == user_id,
            ApartmentFavoriteModel.apartment_id == apartment_id,
        )
        .first()
    )


def get_favorites_paginated(
    db: Session, user_id: int, page: int = 1, page_size: int = 20
) -> tuple[list[ApartmentFavoriteModel], int]:
    """Get a user's favorites with their apartments, newest first."""
    query = db.query(ApartmentFavoriteModel).filter(ApartmentFavoriteModel.user_id == user_id)
    total = query.count()
    skip = (page - 1) * page_size
    favorites = (
        query.options(joinedload(ApartmentFavoriteModel.apartment))
        .order_by(ApartmentFavoriteModel.created_at.desc(), ApartmentFavoriteModel.id.desc())
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return favorites, total


def create_favorite(db: Session, user_id: int, apartment_id: int) -> ApartmentFavoriteModel:
    """Create a new favorite in the database. Pure data access - no business logic."""
    db_favorite = ApartmentFavoriteModel(user_id=user_id, apartment_id=apartment_id)
    db.add(db_favorite)
    db.commit()
    db.refresh(db_favorite)
    return db_favorite


def delete_favorite(db: Session, favorite: ApartmentFavoriteModel) -> None:
    db.delete(favorite)
    db.commit()
