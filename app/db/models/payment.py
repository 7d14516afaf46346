from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.domain.enums import CartMode, PaymentMethod, enum_values


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id"), nullable=False, index=True)
    mode = Column(
        Enum(CartMode, name="payment_mode", native_enum=False, values_callable=enum_values),
        nullable=False,
    )
    amount = Column(Numeric(14, 2), nullable=False)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", native_enum=False, values_callable=enum_values),
        nullable=False,
    )
    status = Column(String(20), nullable=False, default="successful")
    transaction_id = Column(String(64), unique=True, nullable=False)
    reference = Column(String(64), nullable=True)
    note = Column(Text, nullable=True)
    payment_date = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User")
    apartment = relationship("Apartment")
