"""Cart service: rent/buy cart lines, priced summaries and checkout."""

import logging
import uuid

from sqlalchemy.orm import Session

import app.repositories.apartment as apartment_repo
import app.repositories.cart as cart_repo
import app.repositories.lease as lease_repo
import app.repositories.payment as payment_repo
import app.repositories.role as role_repo
from app.core.config import settings
from app.db.models.cart import CartItem as CartItemModel
from app.db.models.user import User as UserModel
from app.domain import RESIDENT, USER
from app.domain.cart_pricing import CartLine, CartPricingPolicy, CartTotals
from app.domain.enums import ApartmentStatus, CartMode
from app.errors import DomainValidationError, NotFoundError
from app.schemas.apartment import Apartment
from app.schemas.cart import (
    CartItem,
    CartItemAdd,
    CartItemUpdate,
    CartResponse,
    CartSummary,
    CheckoutRequest,
    CheckoutResult,
    Payment,
)

logger = logging.getLogger(__name__)

# Apartments in any other state cannot be put in a cart
ADDABLE_STATUSES = frozenset(
    {ApartmentStatus.VACANT, ApartmentStatus.FOR_RENT, ApartmentStatus.FOR_SALE}
)

CHECKOUT_STATUS = {
    CartMode.RENT: ApartmentStatus.FOR_RENT,
    CartMode.BUY: ApartmentStatus.FOR_SALE,
}


def get_pricing_policy() -> CartPricingPolicy:
    return CartPricingPolicy(
        deposit_months=settings.rent_deposit_months,
        tax_rate=settings.cart_tax_rate,
    )


def _to_line(item: CartItemModel) -> CartLine:
    return CartLine(
        mode=item.mode,
        price=item.price_snapshot,
        months=item.months,
        deposit=item.deposit_snapshot,
        maintenance_fee=item.maintenance_fee_snapshot,
        selected=item.selected,
    )


def format_cart_item(item: CartItemModel, policy: CartPricingPolicy | None = None) -> CartItem:
    """Flatten a cart item and its apartment into the priced view clients render."""
    policy = policy or get_pricing_policy()
    apartment = item.apartment
    breakdown = policy.line(_to_line(item))
    return CartItem(
        id=item.id,
        apartment_id=item.apartment_id,
        code=apartment.apartment_number,
        title=f"{apartment.type.value.upper()} Apartment",
        type=apartment.type,
        area=float(apartment.area),
        price=float(item.price_snapshot or 0),
        mode=item.mode,
        months=item.months,
        status=apartment.status,
        selected=item.selected,
        note=item.note,
        building=apartment.building,
        floor=apartment.floor,
        bedrooms=apartment.bedrooms,
        bathrooms=apartment.bathrooms,
        balconies=apartment.balconies,
        parking_slots=apartment.parking_slots,
        amenities=apartment.amenities or [],
        maintenance_fee=float(item.maintenance_fee_snapshot or 0),
        deposit=float(breakdown.deposit),
        subtotal=float(breakdown.subtotal),
        total=float(breakdown.total),
        added_at=item.added_at,
        apartment=Apartment.model_validate(apartment),
    )


def _to_summary(totals: CartTotals) -> CartSummary:
    return CartSummary(
        rent_total=float(totals.rent_total),
        buy_total=float(totals.buy_total),
        subtotal=float(totals.subtotal),
        deposit_total=float(totals.deposit_total),
        maintenance_total=float(totals.maintenance_total),
        taxes=float(totals.taxes),
        grand_total=float(totals.grand_total),
        selected_count=totals.selected_count,
        total_items=totals.total_items,
    )


def get_cart(db: Session, current_user: UserModel) -> CartResponse:
    """The user's cart lines, newest first, with the summary of the selected ones."""
    policy = get_pricing_policy()
    items = cart_repo.get_cart_items_by_user_id(db, current_user.id)
    return CartResponse(
        items=[format_cart_item(item, policy) for item in items],
        summary=_to_summary(policy.summarize(_to_line(item) for item in items)),
    )


def get_cart_summary(db: Session, current_user: UserModel) -> CartSummary:
    items = cart_repo.get_cart_items_by_user_id(db, current_user.id)
    return _to_summary(get_pricing_policy().summarize(_to_line(item) for item in items))


def _get_own_item(db: Session, current_user: UserModel, item_id: int) -> CartItemModel:
    item = cart_repo.get_user_cart_item(db, current_user.id, item_id)
    if not item:
        raise NotFoundError("Cart item not found")
    return item


def add_to_cart(db: Session, current_user: UserModel, item_data: CartItemAdd) -> CartItem:
    """
    Put an apartment in the user's cart for rent or purchase.

    - Apartment must exist and be active
    - Apartment must be listed for the requested mode and be available
    - An existing line for the same apartment and mode is refreshed, not duplicated

    Raises:
        NotFoundError: If apartment doesn't exist
        DomainValidationError: If apartment is not available for the mode
    """
    apartment = apartment_repo.get_apartment_by_id(db, item_data.apartment_id)
    if not apartment or not apartment.is_active:
        raise NotFoundError("Apartment not found")

    if item_data.mode == CartMode.RENT and not apartment.is_listed_for_rent:
        raise DomainValidationError("Apartment is not available for rent")
    if item_data.mode == CartMode.BUY and not apartment.is_listed_for_sale:
        raise DomainValidationError("Apartment is not available for sale")
    if apartment.status not in ADDABLE_STATUSES:
        raise DomainValidationError("Apartment is not available")

    policy = get_pricing_policy()
    snapshot = policy.snapshot(
        item_data.mode,
        monthly_rent=apartment.monthly_rent,
        sale_price=apartment.sale_price,
        maintenance_fee=apartment.maintenance_fee,
    )
    fields = {
        "months": item_data.months,
        "selected": True,
        "price_snapshot": snapshot.price,
        "deposit_snapshot": snapshot.deposit,
        "maintenance_fee_snapshot": snapshot.maintenance_fee,
    }
    if item_data.note is not None:
        fields["note"] = item_data.note

    existing = cart_repo.get_cart_item_by_key(
        db, current_user.id, apartment.id, item_data.mode
    )
    if existing:
        if item_data.months is None:
            fields.pop("months")
        item = cart_repo.update_cart_item(db, existing, **fields)
    else:
        item = cart_repo.create_cart_item(
            db,
            user_id=current_user.id,
            apartment_id=apartment.id,
            mode=item_data.mode,
            **fields,
        )
    return format_cart_item(item, policy)


def update_cart_item(
    db: Session, current_user: UserModel, item_id: int, item_data: CartItemUpdate
) -> CartItem:
    """Change the rental term, selection or note of a line. Months are ignored for purchases."""
    item = _get_own_item(db, current_user, item_id)
    fields = item_data.model_dump(exclude_unset=True)
    if fields.get("months") is None:
        fields.pop("months", None)
    if fields.get("selected") is None:
        fields.pop("selected", None)
    item = cart_repo.update_cart_item(db, item, **fields)
    return format_cart_item(item)


def remove_from_cart(db: Session, current_user: UserModel, item_id: int) -> None:
    item = _get_own_item(db, current_user, item_id)
    cart_repo.delete_cart_item(db, item)


def clear_cart(db: Session, current_user: UserModel) -> int:
    return cart_repo.delete_cart_items_by_user_id(db, current_user.id)


def toggle_selection(
    db: Session, current_user: UserModel, item_id: int, selected: bool
) -> CartItem:
    item = _get_own_item(db, current_user, item_id)
    item = cart_repo.update_cart_item(db, item, selected=selected)
    return format_cart_item(item)


def select_all(db: Session, current_user: UserModel, selected: bool = True) -> list[CartItem]:
    cart_repo.set_selection_for_user(db, current_user.id, selected)
    policy = get_pricing_policy()
    return [
        format_cart_item(item, policy)
        for item in cart_repo.get_cart_items_by_user_id(db, current_user.id)
    ]


def _new_transaction_id() -> str:
    return f"TXN-{uuid.uuid4().hex[:20].upper()}"


def checkout(db: Session, current_user: UserModel, checkout_data: CheckoutRequest) -> CheckoutResult:
    """
    Pay for every selected cart line in one transaction.

    For each line the apartment must still be on the market for the line's mode.
    A payment is recorded, the apartment becomes occupied and is delisted, the
    buyer or renter is registered on it and approved lease requests for it are
    dropped. A plain "user" becomes a "resident". Nothing is kept if any line fails.

    Raises:
        DomainValidationError: If nothing is selected or an apartment is unavailable
    """
    items = cart_repo.get_selected_cart_items(db, current_user.id)
    if not items:
        raise DomainValidationError("No items selected for checkout")

    policy = get_pricing_policy()
    payments = []
    completed_apartments = []
    try:
        for item in items:
            apartment = item.apartment
            if apartment.status != CHECKOUT_STATUS[item.mode]:
                raise DomainValidationError(
                    f"Apartment {apartment.apartment_number} is no longer available for {item.mode.value}"
                )

            payments.append(
                payment_repo.add_payment(
                    db,
                    user_id=current_user.id,
                    apartment_id=apartment.id,
                    mode=item.mode,
                    amount=policy.charge_amount(_to_line(item)),
                    payment_method=checkout_data.payment_method,
                    status="successful",
                    transaction_id=_new_transaction_id(),
                    note=checkout_data.note,
                )
            )

            apartment.status = ApartmentStatus.OCCUPIED
            apartment.is_listed_for_rent = False
            apartment.is_listed_for_sale = False
            if item.mode == CartMode.RENT:
                apartment.tenant_id = current_user.id
            else:
                apartment.owner_id = current_user.id
                apartment.tenant_id = None

            lease_repo.delete_approved_lease_requests(db, current_user.id, apartment.id)
            completed_apartments.append(apartment)
            db.delete(item)

        if current_user.role.name == USER:
            resident = role_repo.get_role_by_name(db, RESIDENT)
            if not resident:
                raise NotFoundError("Resident role not found")
            current_user.role_id = resident.id

        db.commit()
    except DomainValidationError as exc:
        db.rollback()
        logger.warning("Checkout rejected for user %s: %s", current_user.id, exc)
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(current_user)
    for payment in payments:
        db.refresh(payment)
    for apartment in completed_apartments:
        db.refresh(apartment)

    logger.info(
        "User %s checked out %d item(s) via %s",
        current_user.id,
        len(payments),
        checkout_data.payment_method.value,
    )
    return CheckoutResult(
        success=True,
        message=f"Checkout completed for {len(payments)} apartment(s)",
        payments=[
            Payment(
                id=payment.id,
                transaction_id=payment.transaction_id,
                apartment_id=payment.apartment_id,
                mode=payment.mode,
                amount=float(payment.amount),
                status=payment.status,
                payment_method=payment.payment_method,
                payment_date=payment.payment_date,
            )
            for payment in payments
        ],
        completed_apartments=[Apartment.model_validate(a) for a in completed_apartments],
        user_role=current_user.role.name,
    )
