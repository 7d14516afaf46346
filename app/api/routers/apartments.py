from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_roles
from app.db.models.user import User
from app.domain import STAFF_ROLES
from app.domain.enums import ApartmentStatus, ApartmentType, CartMode
from app.services.apartment import (
    create_apartment,
    delete_apartment,
    get_apartment,
    list_apartments,
    update_apartment,
)
from app.schemas.apartment import Apartment, ApartmentCreate, ApartmentUpdate
from app.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/apartments", tags=["apartments"])


@router.post("", response_model=Apartment, status_code=status.HTTP_201_CREATED)
def create_new_apartment(
    apartment_data: ApartmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Create a new apartment. Only admins and building managers can create apartments.
    """
    apartment = create_apartment(db, apartment_data)
    return Apartment.model_validate(apartment)


@router.get("", response_model=PaginatedResponse[Apartment])
def get_all_apartments(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Number of items per page"),
    status_filter: ApartmentStatus | None = Query(None, alias="status"),
    apartment_type: ApartmentType | None = Query(None, alias="type"),
    mode: CartMode | None = Query(None, description="Only apartments listed for rent or for sale"),
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    """
    List active apartments. Public.

    Price bounds apply to the monthly rent for mode=rent, the sale price for
    mode=buy, and either one when no mode is given.
    """
    apartments, total = list_apartments(
        db,
        page=page,
        page_size=page_size,
        status=status_filter,
        apartment_type=apartment_type,
        mode=mode,
        min_price=min_price,
        max_price=max_price,
    )
    return PaginatedResponse(
        items=[Apartment.model_validate(apt) for apt in apartments],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{apartment_id}", response_model=Apartment)
def get_apartment_by_id(apartment_id: int, db: Session = Depends(get_db)):
    """
    Get an apartment by ID. Public.
    """
    return Apartment.model_validate(get_apartment(db, apartment_id))


@router.put("/{apartment_id}", response_model=Apartment)
def update_apartment_by_id(
    apartment_id: int,
    apartment_data: ApartmentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Update an apartment. Only admins and building managers can update apartments.
    """
    apartment = update_apartment(db, apartment_id, apartment_data)
    return Apartment.model_validate(apartment)


@router.delete("/{apartment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_apartment_by_id(
    apartment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Delete an apartment by ID. Only admins and building managers can delete apartments.

    Apartments with lease requests or payments cannot be deleted.
    """
    delete_apartment(db, apartment_id)
