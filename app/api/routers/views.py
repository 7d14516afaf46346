from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, get_optional_user
from app.db.models.user import User
from app.schemas.view import RecentlyViewed, ViewStats, ViewTracked
from app.services import view as view_service

router = APIRouter(prefix="/views", tags=["views"])


@router.get("/recent", response_model=list[RecentlyViewed])
def recently_viewed(
    limit: int = Query(20, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The current user's recently viewed apartments, one entry per apartment."""
    return view_service.recently_viewed(db, current_user, limit)


@router.post(
    "/{apartment_id}",
    response_model=ViewTracked,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": ViewTracked, "description": "Repeat view inside the dedup window"}},
)
def track_view(
    apartment_id: int,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
):
    """
    Record a view of an apartment. Works for guests too.

    Repeat views by the same visitor inside the dedup window are answered
    with 200 and only refresh the view time.
    """
    ip_address = request.client.host if request.client else None
    view, created = view_service.track_view(db, apartment_id, current_user, ip_address)
    if not created:
        response.status_code = status.HTTP_200_OK
    return ViewTracked(view_id=view.id, created=created)


@router.get("/{apartment_id}/stats", response_model=ViewStats)
def view_stats(apartment_id: int, db: Session = Depends(get_db)):
    return ViewStats(apartment_id=apartment_id, view_count=view_service.view_count(db, apartment_id))
