from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    event,
)
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.domain.enums import CartMode, enum_values

DEFAULT_RENT_MONTHS = 12


class CartItem(Base):
    __tablename__ = "carts"
    __table_args__ = (
        UniqueConstraint("user_id", "apartment_id", "mode", name="uq_cart_item"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    apartment_id = Column(
        Integer, ForeignKey("apartments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mode = Column(
        Enum(CartMode, name="cart_mode", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=CartMode.RENT,
    )
    months = Column(Integer, nullable=True)
    selected = Column(Boolean, nullable=False, default=True)
    price_snapshot = Column(Numeric(12, 2), nullable=True)
    deposit_snapshot = Column(Numeric(12, 2), nullable=True)
    maintenance_fee_snapshot = Column(Numeric(10, 2), nullable=True)
    note = Column(Text, nullable=True)
    added_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User", back_populates="cart_items")
    apartment = relationship("Apartment")


def apply_mode_rules(item: CartItem) -> None:
    """A purchase never carries a term; a rental always has one."""
    if item.mode == CartMode.BUY:
        item.months = None
    elif item.mode == CartMode.RENT and not item.months:
        item.months = DEFAULT_RENT_MONTHS


@event.listens_for(CartItem, "before_insert")
@event.listens_for(CartItem, "before_update")
def _normalize_months(_mapper, _connection, target: CartItem) -> None:
    apply_mode_rules(target)
