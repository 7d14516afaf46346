from datetime import datetime

from pydantic import BaseModel

from app.schemas.apartment import ApartmentCard


class ViewTracked(BaseModel):
    view_id: int
    created: bool


class RecentlyViewed(BaseModel):
    viewed_at: datetime
    apartment: ApartmentCard


class ViewStats(BaseModel):
    apartment_id: int
    view_count: int
