from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.domain.enums import ApartmentStatus, ApartmentType


class Apartment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    apartment_number: str
    building: str | None = None
    floor: int
    type: ApartmentType
    area: float
    bedrooms: int
    bathrooms: int
    balconies: int
    parking_slots: int
    monthly_rent: float | None = None
    sale_price: float | None = None
    is_listed_for_rent: bool
    is_listed_for_sale: bool
    maintenance_fee: float
    status: ApartmentStatus
    description: str | None = None
    amenities: list[str] = Field(default_factory=list)
    owner_id: int | None = None
    tenant_id: int | None = None
    is_active: bool

    @field_validator("amenities", mode="before")
    @classmethod
    def null_amenities_to_empty(cls, v: list[str] | None) -> list[str]:
        return v or []


class ApartmentCreate(BaseModel):
    apartment_number: str = Field(..., min_length=1, max_length=20)
    building: str | None = Field(None, max_length=100)
    floor: int
    type: ApartmentType = ApartmentType.TWO_BHK
    area: float = Field(..., gt=0)
    bedrooms: int = Field(..., ge=0, le=10)
    bathrooms: int = Field(..., ge=1, le=10)
    balconies: int = Field(0, ge=0, le=5)
    parking_slots: int = Field(0, ge=0, le=10)
    monthly_rent: float | None = Field(None, ge=0)
    sale_price: float | None = Field(None, ge=0)
    is_listed_for_rent: bool = False
    is_listed_for_sale: bool = False
    maintenance_fee: float = Field(0, ge=0)
    status: ApartmentStatus = ApartmentStatus.VACANT
    description: str | None = None
    amenities: list[str] | None = None
    owner_id: int | None = None
    tenant_id: int | None = None

    @model_validator(mode="after")
    def validate_listing_prices(self):
        """A listing must carry the price it is listed at."""
        if self.is_listed_for_rent and self.monthly_rent is None:
            raise ValueError("monthly_rent is required when listed for rent")
        if self.is_listed_for_sale and self.sale_price is None:
            raise ValueError("sale_price is required when listed for sale")
        return self


class ApartmentUpdate(BaseModel):
    apartment_number: str | None = Field(None, min_length=1, max_length=20)
    building: str | None = Field(None, max_length=100)
    floor: int | None = None
    type: ApartmentType | None = None
    area: float | None = Field(None, gt=0)
    bedrooms: int | None = Field(None, ge=0, le=10)
    bathrooms: int | None = Field(None, ge=1, le=10)
    balconies: int | None = Field(None, ge=0, le=5)
    parking_slots: int | None = Field(None, ge=0, le=10)
    monthly_rent: float | None = Field(None, ge=0)
    sale_price: float | None = Field(None, ge=0)
    is_listed_for_rent: bool | None = None
    is_listed_for_sale: bool | None = None
    maintenance_fee: float | None = Field(None, ge=0)
    status: ApartmentStatus | None = None
    description: str | None = None
    amenities: list[str] | None = None
    owner_id: int | None = None
    tenant_id: int | None = None
    is_active: bool | None = None


class ApartmentCard(BaseModel):
    """Compact listing view used by favorites and recently viewed."""

    id: int
    code: str
    type: ApartmentType
    area: float
    bedrooms: int
    bathrooms: int
    price: float
    mode: str
    status: ApartmentStatus
    building: str | None = None
    floor: int

    @classmethod
    def from_model(cls, apartment) -> "ApartmentCard":
        for_sale = bool(apartment.is_listed_for_sale)
        price = apartment.sale_price if for_sale else apartment.monthly_rent
        return cls(
            id=apartment.id,
            code=apartment.apartment_number,
            type=apartment.type,
            area=float(apartment.area),
            bedrooms=apartment.bedrooms,
            bathrooms=apartment.bathrooms,
            price=float(price or 0),
            mode="buy" if for_sale else "rent",
            status=apartment.status,
            building=apartment.building,
            floor=apartment.floor,
        )
