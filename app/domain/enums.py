"""Closed value sets shared by the ORM models, schemas and GraphQL types."""

from enum import Enum


class CartMode(str, Enum):
    RENT = "rent"
    BUY = "buy"


class ApartmentType(str, Enum):
    STUDIO = "studio"
    ONE_BHK = "1bhk"
    TWO_BHK = "2bhk"
    THREE_BHK = "3bhk"
    FOUR_BHK = "4bhk"
    PENTHOUSE = "penthouse"
    DUPLEX = "duplex"


class ApartmentStatus(str, Enum):
    VACANT = "vacant"
    OCCUPIED = "occupied"
    UNDER_RENOVATION = "under_renovation"
    FOR_RENT = "for_rent"
    FOR_SALE = "for_sale"


class LeaseStatus(str, Enum):
    PENDING_OWNER = "pending_owner"
    PENDING_MANAGER = "pending_manager"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class LeaseDecision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CHECK = "check"
    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    DIGITAL_WALLET = "digital_wallet"
    OTHER = "other"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values (not member names) in string columns."""
    return [member.value for member in enum_cls]
