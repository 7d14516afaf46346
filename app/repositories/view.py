from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.apartment import Apartment as ApartmentModel
from app.db.models.view import ApartmentView as ApartmentViewModel


def get_recent_view(
    db: Session,
    apartment_id: int,
    since: datetime,
    user_id: int | None = None,
    ip_address: str | None = None,
) -> ApartmentViewModel | None:
    """
    Latest view of an apartment at or after ``since`` by the same visitor.

    Authenticated visitors are matched by user id, guests by IP address.
    """
    query = db.query(ApartmentViewModel).filter(
        ApartmentViewModel.apartment_id == apartment_id,
        ApartmentViewModel.viewed_at >= since,
    )
    if user_id is not None:
        query = query.filter(ApartmentViewModel.user_id == user_id)
    else:
        query = query.filter(
            ApartmentViewModel.user_id.is_(None),
            ApartmentViewModel.ip_address == ip_address,
        )
    return query.order_by(ApartmentViewModel.viewed_at.desc()).first()


def create_view(db: Session, **fields) -> ApartmentViewModel:
    """Create a new view in the database. Pure data access - no business logic."""
    db_view = ApartmentViewModel(**fields)
    db.add(db_view)
    db.commit()
    db.refresh(db_view)
    return db_view


def touch_view(db: Session, view: ApartmentViewModel, viewed_at: datetime) -> ApartmentViewModel:
    view.viewed_at = viewed_at
    db.commit()
    db.refresh(view)
    return view


def get_recently_viewed(
    db: Session, user_id: int, limit: int = 20
) -> list[tuple[ApartmentModel, datetime]]:
    """A user's most recently viewed apartments, one row per apartment, newest first."""
    last_viewed = func.max(ApartmentViewModel.viewed_at).label("last_viewed")
    latest = (
        db.query(ApartmentViewModel.apartment_id, last_viewed)
        .filter(ApartmentViewModel.user_id == user_id)
        .group_by(ApartmentViewModel.apartment_id)
        .subquery()
    )
    rows = (
        db.query(ApartmentModel, latest.c.last_viewed)
        .join(latest, latest.c.apartment_id == ApartmentModel.id)
        .order_by(latest.c.last_viewed.desc(), ApartmentModel.id.desc())
        .limit(limit)
        .all()
    )
    return [(apartment, viewed_at) for apartment, viewed_at in rows]


def count_views(db: Session, apartment_id: int) -> int:
    return (
        db.query(func.count(ApartmentViewModel.id))
        .filter(ApartmentViewModel.apartment_id == apartment_id)
        .scalar()
    )
