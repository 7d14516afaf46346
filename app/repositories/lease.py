from sqlalchemy.orm import Session

from app.db.models.lease_request import LeaseRequest as LeaseRequestModel
from app.domain.enums import CartMode, LeaseStatus


def get_lease_request_by_id(db: Session, lease_id: int) -> LeaseRequestModel | None:
    """Get a lease request by ID."""
    return db.query(LeaseRequestModel).filter(LeaseRequestModel.id == lease_id).first()


def get_lease_requests_paginated(
    db: Session,
    page: int = 1,
    page_size: int = 20,
    status: LeaseStatus | None = None,
    lease_type: CartMode | None = None,
    apartment_id: int | None = None,
    requester_id: int | None = None,
    q: str | None = None,
) -> tuple[list[LeaseRequestModel], int]:
    """
    Get lease requests with pagination and optional filters, newest first.

    Every whitespace-separated token of ``q`` must appear in the note.
    """
    query = db.query(LeaseRequestModel)

    if status is not None:
        query = query.filter(LeaseRequestModel.status == status)
    if lease_type is not None:
        query = query.filter(LeaseRequestModel.type == lease_type)
    if apartment_id is not None:
        query = query.filter(LeaseRequestModel.apartment_id == apartment_id)
    if requester_id is not None:
        query = query.filter(LeaseRequestModel.user_id == requester_id)
    if q:
        for token in q.split():
            query = query.filter(LeaseRequestModel.note.ilike(f"%{token}%"))

    total = query.count()
    skip = (page - 1) * page_size
    leases = (
        query.order_by(LeaseRequestModel.created_at.desc(), LeaseRequestModel.id.desc())
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return leases, total


def create_lease_request(db: Session, **fields) -> LeaseRequestModel:
    """Create a new lease request in the database. Pure data access - no business logic."""
    db_lease = LeaseRequestModel(**fields)
    db.add(db_lease)
    db.commit()
    db.refresh(db_lease)
    return db_lease


def delete_approved_lease_requests(
    db: Session, user_id: int, apartment_id: int
) -> int:
    """Stage removal of a user's approved requests for an apartment. The caller commits."""
    return (
        db.query(LeaseRequestModel)
        .filter(
            LeaseRequestModel.user_id == user_id,
            LeaseRequestModel.apartment_id == apartment_id,
            LeaseRequestModel.status == LeaseStatus.APPROVED,
        )
        .delete(synchronize_session=False)
    )
