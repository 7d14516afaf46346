from sqlalchemy.orm import Session

import app.repositories.apartment as apartment_repo
import app.repositories.user as user_repo
from app.db.models.apartment import Apartment as ApartmentModel
from app.domain.enums import ApartmentStatus, ApartmentType, CartMode
from app.errors import DomainValidationError, DuplicateResourceError, NotFoundError
from app.schemas.apartment import ApartmentCreate, ApartmentUpdate

# Columns that cannot be cleared; an explicit null leaves them unchanged
REQUIRED_UPDATE_FIELDS = frozenset(
    {
        "apartment_number",
        "floor",
        "type",
        "area",
        "bedrooms",
        "bathrooms",
        "balconies",
        "parking_slots",
        "is_listed_for_rent",
        "is_listed_for_sale",
        "maintenance_fee",
        "status",
        "is_active",
    }
)


def _ensure_users_exist(db: Session, **user_ids: int | None) -> None:
    for label, user_id in user_ids.items():
        if user_id is not None and not user_repo.get_user_by_id(db, user_id):
            raise NotFoundError(f"{label.capitalize()} with id {user_id} not found")


def get_apartment(db: Session, apartment_id: int) -> ApartmentModel:
    apartment = apartment_repo.get_apartment_by_id(db, apartment_id)
    if not apartment:
        raise NotFoundError("Apartment not found")
    return apartment


def list_apartments(
    db: Session,
    page: int = 1,
    page_size: int = 20,
    status: ApartmentStatus | None = None,
    apartment_type: ApartmentType | None = None,
    mode: CartMode | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> tuple[list[ApartmentModel], int]:
    """List active apartments. Public, so no authorization checks."""
    if min_price is not None and max_price is not None and min_price > max_price:
        raise DomainValidationError("min_price cannot be greater than max_price")
    return apartment_repo.get_apartments_paginated(
        db,
        page=page,
        page_size=page_size,
        status=status,
        apartment_type=apartment_type,
        mode=mode,
        min_price=min_price,
        max_price=max_price,
    )


def create_apartment(db: Session, apartment_data: ApartmentCreate) -> ApartmentModel:
    """
    Create an apartment with domain validation.

    - Enforces uniqueness of (floor, apartment_number)
    - Owner and tenant, when given, must be existing users

    Raises:
        DuplicateResourceError: If (floor, apartment_number) already exists
        NotFoundError: If owner or tenant doesn't exist
    """
    existing = apartment_repo.get_apartment_by_floor_number(
        db, apartment_data.floor, apartment_data.apartment_number
    )
    if existing:
        raise DuplicateResourceError(
            f"Apartment {apartment_data.apartment_number} already exists on floor {apartment_data.floor}"
        )
    _ensure_users_exist(db, owner=apartment_data.owner_id, tenant=apartment_data.tenant_id)

    return apartment_repo.create_apartment(db, **apartment_data.model_dump())


def update_apartment(
    db: Session, apartment_id: int, apartment_data: ApartmentUpdate
) -> ApartmentModel:
    """
    Update an apartment with domain validation.

    - Validates apartment exists
    - Enforces uniqueness of (floor, apartment_number) when changed
    - A listing flag left on must still have its price

    Raises:
        NotFoundError: If apartment, owner or tenant doesn't exist
        DuplicateResourceError: If new (floor, apartment_number) already exists
        DomainValidationError: If a listing would lose its price
    """
    apartment = get_apartment(db, apartment_id)
    fields = {
        name: value
        for name, value in apartment_data.model_dump(exclude_unset=True).items()
        if value is not None or name not in REQUIRED_UPDATE_FIELDS
    }

    if "floor" in fields or "apartment_number" in fields:
        final_floor = fields.get("floor", apartment.floor)
        final_number = fields.get("apartment_number", apartment.apartment_number)
        existing = apartment_repo.get_apartment_by_floor_number(
            db, final_floor, final_number, exclude_id=apartment_id
        )
        if existing:
            raise DuplicateResourceError(
                f"Apartment {final_number} already exists on floor {final_floor}"
            )

    _ensure_users_exist(db, owner=fields.get("owner_id"), tenant=fields.get("tenant_id"))

    listed_for_rent = fields.get("is_listed_for_rent", apartment.is_listed_for_rent)
    listed_for_sale = fields.get("is_listed_for_sale", apartment.is_listed_for_sale)
    if listed_for_rent and fields.get("monthly_rent", apartment.monthly_rent) is None:
        raise DomainValidationError("monthly_rent is required when listed for rent")
    if listed_for_sale and fields.get("sale_price", apartment.sale_price) is None:
        raise DomainValidationError("sale_price is required when listed for sale")

    return apartment_repo.update_apartment(db, apartment_id, **fields)


def delete_apartment(db: Session, apartment_id: int) -> None:
    """
    Delete an apartment with business logic validation.

    - Validates apartment exists
    - Apartments with lease requests or payments cannot be deleted

    Raises:
        NotFoundError: If apartment doesn't exist
        DomainValidationError: If apartment has lease requests or payments
    """
    get_apartment(db, apartment_id)

    if apartment_repo.apartment_has_lease_requests(db, apartment_id):
        raise DomainValidationError(
            "Cannot delete apartment: apartment has associated lease requests"
        )
    if apartment_repo.apartment_has_payments(db, apartment_id):
        raise DomainValidationError("Cannot delete apartment: apartment has associated payments")

    apartment_repo.delete_apartment(db, apartment_id)
