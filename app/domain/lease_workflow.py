"""Lease request lifecycle.

pending_owner --owner approves--> pending_manager --manager approves--> approved
      |                                  |
      +--owner rejects--> rejected <-----+--manager rejects
      |                                  |
      +--requester cancels--> cancelled <+--requester cancels
"""

from __future__ import annotations

from app.domain.enums import LeaseDecision, LeaseStatus

PENDING_STATUSES = frozenset({LeaseStatus.PENDING_OWNER, LeaseStatus.PENDING_MANAGER})


def initial_status(*, apartment_owner_id: int | None, requester_id: int) -> LeaseStatus:
    """An owned apartment needs its owner's consent before the manager sees the request."""
    if apartment_owner_id is not None and apartment_owner_id != requester_id:
        return LeaseStatus.PENDING_OWNER
    return LeaseStatus.PENDING_MANAGER


def after_owner_decision(decision: LeaseDecision) -> LeaseStatus:
    if decision == LeaseDecision.APPROVE:
        return LeaseStatus.PENDING_MANAGER
    return LeaseStatus.REJECTED


def after_manager_decision(decision: LeaseDecision) -> LeaseStatus:
    if decision == LeaseDecision.APPROVE:
        return LeaseStatus.APPROVED
    return LeaseStatus.REJECTED


def can_cancel(status: LeaseStatus) -> bool:
    return status in PENDING_STATUSES
