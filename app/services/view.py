from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

import app.repositories.apartment as apartment_repo
import app.repositories.view as view_repo
from app.core.config import settings
from app.db.models.user import User as UserModel
from app.db.models.view import ApartmentView as ApartmentViewModel
from app.errors import NotFoundError
from app.schemas.apartment import ApartmentCard
from app.schemas.view import RecentlyViewed


def track_view(
    db: Session,
    apartment_id: int,
    current_user: UserModel | None,
    ip_address: str | None,
) -> tuple[ApartmentViewModel, bool]:
    """
    Record that an apartment was viewed.

    Repeat views by the same user (or, for guests, the same IP address) inside
    the dedup window only move the existing row's timestamp.

    Returns:
        Tuple of (view, created)
    """
    if not apartment_repo.get_apartment_by_id(db, apartment_id):
        raise NotFoundError("Apartment not found")

    now = datetime.now(timezone.utc)
    user_id = current_user.id if current_user else None
    recent = view_repo.get_recent_view(
        db,
        apartment_id,
        since=now - timedelta(minutes=settings.view_dedup_minutes),
        user_id=user_id,
        ip_address=ip_address,
    )
    if recent:
        return view_repo.touch_view(db, recent, now), False

    view = view_repo.create_view(
        db,
        apartment_id=apartment_id,
        user_id=user_id,
        ip_address=None if user_id else ip_address,
        viewed_at=now,
    )
    return view, True


def recently_viewed(db: Session, current_user: UserModel, limit: int = 20) -> list[RecentlyViewed]:
    return [
        RecentlyViewed(viewed_at=viewed_at, apartment=ApartmentCard.from_model(apartment))
        for apartment, viewed_at in view_repo.get_recently_viewed(db, current_user.id, limit)
    ]


def view_count(db: Session, apartment_id: int) -> int:
    if not apartment_repo.get_apartment_by_id(db, apartment_id):
        raise NotFoundError("Apartment not found")
    return view_repo.count_views(db, apartment_id)
