from datetime import datetime

from pydantic import BaseModel

from app.schemas.apartment import ApartmentCard


class Favorite(BaseModel):
    id: int
    apartment_id: int
    added_at: datetime
    apartment: ApartmentCard


class FavoriteStatus(BaseModel):
    apartment_id: int
    is_favorite: bool
