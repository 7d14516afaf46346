from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class ApartmentView(Base):
    __tablename__ = "apartment_views"
    __table_args__ = (
        Index("ix_apartment_views_user_viewed_at", "user_id", "viewed_at"),
        Index("ix_apartment_views_ip_apartment_viewed_at", "ip_address", "apartment_id", "viewed_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    apartment_id = Column(
        Integer, ForeignKey("apartments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    viewed_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    ip_address = Column(String(45), nullable=True)  # guests only

    # Relationships
    apartment = relationship("Apartment")
