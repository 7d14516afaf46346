"""Lease request service: rent/buy requests and the owner/manager approval chain."""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

import app.repositories.apartment as apartment_repo
import app.repositories.lease as lease_repo
from app.db.models.lease_request import LeaseRequest as LeaseRequestModel
from app.db.models.user import User as UserModel
from app.domain import ADMIN, STAFF_ROLES
from app.domain import lease_workflow
from app.domain.enums import ApartmentStatus, CartMode, LeaseDecision, LeaseStatus
from app.errors import DomainValidationError, ForbiddenError, NotFoundError
from app.schemas.lease import LeaseRequestCreate

logger = logging.getLogger(__name__)


def _get_lease_request(db: Session, lease_id: int) -> LeaseRequestModel:
    lease = lease_repo.get_lease_request_by_id(db, lease_id)
    if not lease:
        raise NotFoundError("Lease request not found")
    return lease


def create_lease_request(
    db: Session, lease_data: LeaseRequestCreate, current_user: UserModel
) -> LeaseRequestModel:
    """
    Submit a rent or purchase request for an apartment.

    - Apartment must exist and be active
    - Apartment must not be occupied and must be listed for the request type
    - Owned apartments wait for their owner first, others go straight to the manager

    Raises:
        NotFoundError: If apartment doesn't exist
        DomainValidationError: If apartment is occupied or not listed for the type
    """
    apartment = apartment_repo.get_apartment_by_id(db, lease_data.apartment_id)
    if not apartment or not apartment.is_active:
        raise NotFoundError("Apartment not found")

    if apartment.status == ApartmentStatus.OCCUPIED:
        raise DomainValidationError("Apartment already occupied")
    if lease_data.type == CartMode.RENT and not apartment.is_listed_for_rent:
        raise DomainValidationError("Apartment is not listed for rent")
    if lease_data.type == CartMode.BUY and not apartment.is_listed_for_sale:
        raise DomainValidationError("Apartment is not listed for sale")

    status = lease_workflow.initial_status(
        apartment_owner_id=apartment.owner_id, requester_id=current_user.id
    )
    lease = lease_repo.create_lease_request(
        db,
        user_id=current_user.id,
        status=status,
        **lease_data.model_dump(),
    )
    logger.info(
        "Lease request %s (%s) created by user %s for apartment %s",
        lease.id,
        lease.type.value,
        current_user.id,
        apartment.id,
    )
    return lease


def list_lease_requests(
    db: Session,
    current_user: UserModel,
    page: int = 1,
    page_size: int = 20,
    status: LeaseStatus | None = None,
    lease_type: CartMode | None = None,
    apartment_id: int | None = None,
    requester_id: int | None = None,
    q: str | None = None,
) -> tuple[list[LeaseRequestModel], int]:
    """
    List lease requests visible to the given user.

    - Admin/Building manager: all requests, optionally filtered by requester
    - Everyone else: only their own requests
    """
    if current_user.role.name not in STAFF_ROLES:
        requester_id = current_user.id
    return lease_repo.get_lease_requests_paginated(
        db,
        page=page,
        page_size=page_size,
        status=status,
        lease_type=lease_type,
        apartment_id=apartment_id,
        requester_id=requester_id,
        q=q,
    )


def get_lease_request(db: Session, lease_id: int, current_user: UserModel) -> LeaseRequestModel:
    """Staff, the requester and the apartment owner may read a request."""
    lease = _get_lease_request(db, lease_id)
    if (
        current_user.role.name not in STAFF_ROLES
        and lease.user_id != current_user.id
        and lease.apartment.owner_id != current_user.id
    ):
        raise ForbiddenError("You can only access your own lease requests")
    return lease


def owner_decision(
    db: Session, lease_id: int, decision: LeaseDecision, current_user: UserModel
) -> LeaseRequestModel:
    """
    Apartment owner approves or rejects a request waiting for them.

    Raises:
        NotFoundError: If lease request doesn't exist
        DomainValidationError: If the request is not waiting for the owner
        ForbiddenError: If the current user doesn't own the apartment
    """
    lease = _get_lease_request(db, lease_id)
    if lease.status != LeaseStatus.PENDING_OWNER:
        raise DomainValidationError("Request is not waiting for owner")
    if lease.apartment.owner_id != current_user.id:
        raise ForbiddenError("Only the apartment owner can decide")

    lease.status = lease_workflow.after_owner_decision(decision)
    if lease.status == LeaseStatus.REJECTED:
        lease.decision_by = current_user.id
        lease.decision_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(lease)
    logger.info("Owner %s %s lease request %s", current_user.id, decision.value, lease.id)
    return lease


def manager_decision(
    db: Session, lease_id: int, decision: LeaseDecision, current_user: UserModel
) -> LeaseRequestModel:
    """
    Building staff approves or rejects a request waiting for the manager.

    On approval the apartment is handed over: a rental registers the requester
    as tenant and closes the rent listing, a purchase makes the requester the
    owner, clears the tenant and closes both listings.

    Raises:
        NotFoundError: If lease request doesn't exist
        DomainValidationError: If the request is not waiting for the manager
    """
    lease = _get_lease_request(db, lease_id)
    if lease.status != LeaseStatus.PENDING_MANAGER:
        raise DomainValidationError("Request is not ready for manager decision")

    lease.status = lease_workflow.after_manager_decision(decision)
    lease.decision_by = current_user.id
    lease.decision_at = datetime.now(timezone.utc)

    if lease.status == LeaseStatus.APPROVED:
        apartment = lease.apartment
        apartment.status = ApartmentStatus.OCCUPIED
        if lease.type == CartMode.RENT:
            apartment.tenant_id = lease.user_id
            apartment.is_listed_for_rent = False
        else:
            apartment.owner_id = lease.user_id
            apartment.tenant_id = None
            apartment.is_listed_for_rent = False
            apartment.is_listed_for_sale = False

    db.commit()
    db.refresh(lease)
    logger.info("Manager %s %s lease request %s", current_user.id, decision.value, lease.id)
    return lease


def cancel_lease_request(db: Session, lease_id: int, current_user: UserModel) -> LeaseRequestModel:
    """
    Requester (or an admin) withdraws a request that is still pending.

    Raises:
        NotFoundError: If lease request doesn't exist
        ForbiddenError: If the current user is neither the requester nor an admin
        DomainValidationError: If the request is no longer pending
    """
    lease = _get_lease_request(db, lease_id)
    if lease.user_id != current_user.id and current_user.role.name != ADMIN:
        raise ForbiddenError("You can only cancel your own lease requests")
    if not lease_workflow.can_cancel(lease.status):
        raise DomainValidationError("Only pending requests can be cancelled")

    lease.status = LeaseStatus.CANCELLED
    db.commit()
    db.refresh(lease)
    logger.info("Lease request %s cancelled by user %s", lease.id, current_user.id)
    return lease
