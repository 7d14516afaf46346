from datetime import datetime

import strawberry

from app.domain.enums import ApartmentStatus, ApartmentType, CartMode, PaymentMethod
from app.schemas import apartment as apartment_schemas
from app.schemas import cart as cart_schemas

CartModeEnum = strawberry.enum(CartMode, name="CartMode")
ApartmentTypeEnum = strawberry.enum(ApartmentType, name="ApartmentType")
ApartmentStatusEnum = strawberry.enum(ApartmentStatus, name="ApartmentStatus")
PaymentMethodEnum = strawberry.enum(PaymentMethod, name="PaymentMethod")


@strawberry.type
class Apartment:
    id: strawberry.ID
    apartment_number: str
    building: str | None
    floor: int
    type: ApartmentTypeEnum
    area: float
    bedrooms: int
    bathrooms: int
    balconies: int
    parking_slots: int
    monthly_rent: float | None
    sale_price: float | None
    is_listed_for_rent: bool
    is_listed_for_sale: bool
    maintenance_fee: float
    status: ApartmentStatusEnum
    description: str | None
    amenities: list[str]
    owner_id: int | None
    tenant_id: int | None

    @classmethod
    def from_schema(cls, apartment: apartment_schemas.Apartment) -> "Apartment":
        data = apartment.model_dump(exclude={"is_active"})
        data["id"] = strawberry.ID(str(apartment.id))
        return cls(**data)


@strawberry.type
class CartItem:
    """One cart line with the apartment details and its priced breakdown."""

    id: strawberry.ID
    apartment_id: strawberry.ID
    code: str
    title: str
    type: ApartmentTypeEnum
    area: float
    price: float
    mode: CartModeEnum
    months: int | None
    status: ApartmentStatusEnum
    selected: bool
    note: str | None
    building: str | None
    floor: int
    bedrooms: int
    bathrooms: int
    balconies: int
    parking_slots: int
    amenities: list[str]
    maintenance_fee: float
    deposit: float
    subtotal: float
    total: float
    added_at: datetime
    apartment: Apartment

    @classmethod
    def from_schema(cls, item: cart_schemas.CartItem) -> "CartItem":
        data = item.model_dump(exclude={"apartment"})
        data["id"] = strawberry.ID(str(item.id))
        data["apartment_id"] = strawberry.ID(str(item.apartment_id))
        return cls(**data, apartment=Apartment.from_schema(item.apartment))


@strawberry.type
class CartSummary:
    rent_total: float
    buy_total: float
    subtotal: float
    deposit_total: float
    maintenance_total: float
    taxes: float
    grand_total: float
    selected_count: int
    total_items: int

    @classmethod
    def from_schema(cls, summary: cart_schemas.CartSummary) -> "CartSummary":
        return cls(**summary.model_dump())


@strawberry.type
class CartResponse:
    items: list[CartItem]
    summary: CartSummary

    @classmethod
    def from_schema(cls, cart: cart_schemas.CartResponse) -> "CartResponse":
        return cls(
            items=[CartItem.from_schema(item) for item in cart.items],
            summary=CartSummary.from_schema(cart.summary),
        )


@strawberry.type
class Payment:
    id: strawberry.ID
    transaction_id: str
    apartment_id: strawberry.ID
    mode: CartModeEnum
    amount: float
    status: str
    payment_method: PaymentMethodEnum
    payment_date: datetime


@strawberry.type
class CheckoutResult:
    success: bool
    message: str
    payments: list[Payment]
    completed_apartments: list[Apartment]
    user_role: str

    @classmethod
    def from_schema(cls, result: cart_schemas.CheckoutResult) -> "CheckoutResult":
        return cls(
            success=result.success,
            message=result.message,
            payments=[
                Payment(
                    **payment.model_dump(exclude={"id", "apartment_id"}),
                    id=strawberry.ID(str(payment.id)),
                    apartment_id=strawberry.ID(str(payment.apartment_id)),
                )
                for payment in result.payments
            ],
            completed_apartments=[
                Apartment.from_schema(apartment) for apartment in result.completed_apartments
            ],
            user_role=result.user_role,
        )


@strawberry.input
class AddToCartInput:
    apartment_id: strawberry.ID
    mode: CartModeEnum
    months: int | None = None
    note: str | None = None


@strawberry.input
class UpdateCartItemInput:
    months: int | None = strawberry.UNSET
    selected: bool | None = strawberry.UNSET
    note: str | None = strawberry.UNSET


@strawberry.input
class CheckoutInput:
    payment_method: PaymentMethodEnum
    note: str | None = None
