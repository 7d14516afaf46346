from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles
from app.db.models.user import User
from app.domain import OWNER, RESIDENT, STAFF_ROLES, USER
from app.domain.enums import CartMode, LeaseStatus
from app.schemas.lease import LeaseDecisionRequest, LeaseRequest, LeaseRequestCreate
from app.schemas.pagination import PaginatedResponse
from app.services import lease as lease_service

router = APIRouter(prefix="/leases", tags=["leases"])


@router.post("", response_model=LeaseRequest, status_code=status.HTTP_201_CREATED)
def create_lease_request(
    lease_data: LeaseRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(USER, RESIDENT, OWNER)),
):
    """
    Request to rent or buy an apartment.

    Apartments with an owner wait for the owner's decision before the manager's.
    """
    lease = lease_service.create_lease_request(db, lease_data, current_user)
    return LeaseRequest.model_validate(lease)


@router.get("", response_model=PaginatedResponse[LeaseRequest])
def list_lease_requests(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    status_filter: LeaseStatus | None = Query(None, alias="status"),
    lease_type: CartMode | None = Query(None, alias="type"),
    apartment_id: int | None = Query(None),
    requester_id: int | None = Query(None),
    q: str | None = Query(None, description="Every word must appear in the note"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    List lease requests, newest first.

    - Admin and Building manager: all requests
    - Everyone else: only their own requests
    """
    leases, total = lease_service.list_lease_requests(
        db,
        current_user,
        page=page,
        page_size=page_size,
        status=status_filter,
        lease_type=lease_type,
        apartment_id=apartment_id,
        requester_id=requester_id,
        q=q,
    )
    return PaginatedResponse(
        items=[LeaseRequest.model_validate(lease) for lease in leases],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{lease_id}", response_model=LeaseRequest)
def get_lease_request(
    lease_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeaseRequest.model_validate(lease_service.get_lease_request(db, lease_id, current_user))


@router.post("/{lease_id}/owner-decision", response_model=LeaseRequest)
def owner_decision(
    lease_id: int,
    decision: LeaseDecisionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Approve or reject a request as the apartment's owner."""
    lease = lease_service.owner_decision(db, lease_id, decision.decision, current_user)
    return LeaseRequest.model_validate(lease)


@router.post("/{lease_id}/manager-decision", response_model=LeaseRequest)
def manager_decision(
    lease_id: int,
    decision: LeaseDecisionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """Approve or reject a request as building staff. Approval hands the apartment over."""
    lease = lease_service.manager_decision(db, lease_id, decision.decision, current_user)
    return LeaseRequest.model_validate(lease)


@router.post("/{lease_id}/cancel", response_model=LeaseRequest)
def cancel_lease_request(
    lease_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lease = lease_service.cancel_lease_request(db, lease_id, current_user)
    return LeaseRequest.model_validate(lease)
