from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.domain.enums import ApartmentStatus, ApartmentType, enum_values


class Apartment(Base):
    __tablename__ = "apartments"
    __table_args__ = (
        UniqueConstraint("floor", "apartment_number", name="uq_apartments_floor_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    apartment_number = Column(String(20), nullable=False)
    building = Column(String(100), nullable=True)
    floor = Column(Integer, nullable=False)
    type = Column(
        Enum(ApartmentType, name="apartment_type", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=ApartmentType.TWO_BHK,
    )
    area = Column(Numeric(8, 2), nullable=False)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    balconies = Column(Integer, nullable=False, default=0)
    parking_slots = Column(Integer, nullable=False, default=0)
    monthly_rent = Column(Numeric(10, 2), nullable=True)
    sale_price = Column(Numeric(12, 2), nullable=True)
    is_listed_for_rent = Column(Boolean, nullable=False, default=False)
    is_listed_for_sale = Column(Boolean, nullable=False, default=False)
    maintenance_fee = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(
        Enum(ApartmentStatus, name="apartment_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=ApartmentStatus.VACANT,
        index=True,
    )
    description = Column(Text, nullable=True)
    amenities = Column(JSON, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    tenant_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id])
    tenant = relationship("User", foreign_keys=[tenant_id])
