from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.domain.enums import CartMode, LeaseStatus, enum_values


class LeaseRequest(Base):
    __tablename__ = "lease_requests"

    id = Column(Integer, primary_key=True, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(
        Enum(CartMode, name="lease_type", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=CartMode.RENT,
        index=True,
    )
    status = Column(
        Enum(LeaseStatus, name="lease_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=LeaseStatus.PENDING_MANAGER,
        index=True,
    )
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    monthly_rent = Column(Numeric(10, 2), nullable=True)
    total_price = Column(Numeric(12, 2), nullable=True)
    note = Column(String(500), nullable=True)
    decision_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    decision_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    apartment = relationship("Apartment", backref="lease_requests")
    requester = relationship("User", foreign_keys=[user_id])
    approver = relationship("User", foreign_keys=[decision_by])
