from datetime import datetime

from pydantic import BaseModel, Field

from app.domain.enums import ApartmentStatus, ApartmentType, CartMode, PaymentMethod
from app.schemas.apartment import Apartment


class CartItem(BaseModel):
    """A cart line flattened with the apartment details the checkout page shows."""

    id: int
    apartment_id: int
    code: str
    title: str
    type: ApartmentType
    area: float
    price: float
    mode: CartMode
    months: int | None = None
    status: ApartmentStatus
    selected: bool
    note: str | None = None

    building: str | None = None
    floor: int

    bedrooms: int
    bathrooms: int
    balconies: int
    parking_slots: int
    amenities: list[str] = Field(default_factory=list)

    maintenance_fee: float
    deposit: float
    subtotal: float
    total: float

    added_at: datetime
    apartment: Apartment


class CartSummary(BaseModel):
    rent_total: float
    buy_total: float
    subtotal: float
    deposit_total: float
    maintenance_total: float
    taxes: float
    grand_total: float
    selected_count: int
    total_items: int


class CartResponse(BaseModel):
    items: list[CartItem]
    summary: CartSummary


class CartItemAdd(BaseModel):
    apartment_id: int
    mode: CartMode
    months: int | None = Field(None, ge=1, le=60, description="Rental term; ignored for purchases")
    note: str | None = Field(None, max_length=2000)


class CartItemUpdate(BaseModel):
    months: int | None = Field(None, ge=1, le=60)
    selected: bool | None = None
    note: str | None = Field(None, max_length=2000)


class CartSelection(BaseModel):
    selected: bool = True


class CheckoutRequest(BaseModel):
    payment_method: PaymentMethod
    note: str | None = Field(None, max_length=2000)


class Payment(BaseModel):
    id: int
    transaction_id: str
    apartment_id: int
    mode: CartMode
    amount: float
    status: str
    payment_method: PaymentMethod
    payment_date: datetime


class CheckoutResult(BaseModel):
    success: bool
    message: str
    payments: list[Payment]
    completed_apartments: list[Apartment]
    user_role: str
