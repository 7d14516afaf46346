from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.db.models.apartment import Apartment as ApartmentModel
from app.db.models.cart import CartItem as CartItemModel
from app.db.models.favorite import ApartmentFavorite as ApartmentFavoriteModel
from app.db.models.lease_request import LeaseRequest as LeaseRequestModel
from app.db.models.payment import Payment as PaymentModel
from app.db.models.review import ApartmentReview as ApartmentReviewModel
from app.db.models.view import ApartmentView as ApartmentViewModel
from app.domain.enums import ApartmentStatus, ApartmentType, CartMode
from app.errors import NotFoundError


def get_apartment_by_id(db: Session, apartment_id: int) -> ApartmentModel | None:
    """Get an apartment by ID."""
    return db.query(ApartmentModel).filter(ApartmentModel.id == apartment_id).first()


def get_apartment_by_floor_number(
    db: Session, floor: int, apartment_number: str, exclude_id: int | None = None
) -> ApartmentModel | None:
    """Get an apartment by floor and apartment number combination."""
    query = db.query(ApartmentModel).filter(
        ApartmentModel.floor == floor,
        ApartmentModel.apartment_number == apartment_number,
    )
    if exclude_id is not None:
        query = query.filter(ApartmentModel.id != exclude_id)
    return query.first()


def get_apartments_paginated(
    db: Session,
    page: int = 1,
    page_size: int = 20,
    status: ApartmentStatus | None = None,
    apartment_type: ApartmentType | None = None,
    mode: CartMode | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    include_inactive: bool = False,
) -> tuple[list[ApartmentModel], int]:
    """
    Get apartments with pagination and optional filters.

    The price filters apply to the monthly rent when mode is "rent", to the
    sale price when mode is "buy", and to either one when no mode is given.
    """
    query = db.query(ApartmentModel)

    if not include_inactive:
        query = query.filter(ApartmentModel.is_active.is_(True))
    if status is not None:
        query = query.filter(ApartmentModel.status == status)
    if apartment_type is not None:
        query = query.filter(ApartmentModel.type == apartment_type)

    if mode == CartMode.RENT:
        query = query.filter(ApartmentModel.is_listed_for_rent.is_(True))
        price_columns = [ApartmentModel.monthly_rent]
    elif mode == CartMode.BUY:
        query = query.filter(ApartmentModel.is_listed_for_sale.is_(True))
        price_columns = [ApartmentModel.sale_price]
    else:
        price_columns = [ApartmentModel.monthly_rent, ApartmentModel.sale_price]

    if min_price is not None:
        query = query.filter(or_(*(column >= min_price for column in price_columns)))
    if max_price is not None:
        query = query.filter(or_(*(column <= max_price for column in price_columns)))

    total = query.count()
    skip = (page - 1) * page_size
    apartments = (
        query.order_by(ApartmentModel.floor, ApartmentModel.apartment_number)
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return apartments, total


def create_apartment(db: Session, **fields) -> ApartmentModel:
    """Create a new apartment in the database. Pure data access - no business logic."""
    db_apartment = ApartmentModel(**fields)
    db.add(db_apartment)
    db.commit()
    db.refresh(db_apartment)
    return db_apartment


def update_apartment(db: Session, apartment_id: int, **fields) -> ApartmentModel:
    """
    Update an apartment. Only updates fields that are explicitly provided.

    To clear a nullable field, explicitly pass it with None value.
    """
    apartment = get_apartment_by_id(db, apartment_id)
    if not apartment:
        raise NotFoundError("Apartment not found")

    for field, value in fields.items():
        setattr(apartment, field, value)

    db.commit()
    db.refresh(apartment)
    return apartment


def apartment_has_lease_requests(db: Session, apartment_id: int) -> bool:
    return (
        db.query(LeaseRequestModel.id)
        .filter(LeaseRequestModel.apartment_id == apartment_id)
        .first()
        is not None
    )


def apartment_has_payments(db: Session, apartment_id: int) -> bool:
    return (
        db.query(PaymentModel.id).filter(PaymentModel.apartment_id == apartment_id).first()
        is not None
    )


def get_apartments_linked_to_user(db: Session, user_id: int) -> list[ApartmentModel]:
    """Apartments where the user is the registered owner or tenant."""
    return (
        db.query(ApartmentModel)
        .filter(or_(ApartmentModel.owner_id == user_id, ApartmentModel.tenant_id == user_id))
        .all()
    )


def delete_apartment(db: Session, apartment_id: int) -> None:
    """Delete an apartment from the database. Pure data access - no business logic."""
    apartment = get_apartment_by_id(db, apartment_id)
    if not apartment:
        raise NotFoundError("Apartment not found")

    # Listing-side rows go with the apartment on every backend, SQLite included
    for model in (CartItemModel, ApartmentFavoriteModel, ApartmentReviewModel, ApartmentViewModel):
        db.query(model).filter(model.apartment_id == apartment_id).delete(
            synchronize_session=False
        )
    db.delete(apartment)
    db.commit()
