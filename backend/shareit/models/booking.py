"""
Booking model: a reservation of an item for [start_date, end_date).

Key design decisions:
- status is a plain string column guarded by a CHECK constraint
- no uniqueness or overlap constraint: double booking is not prevented here
- composite indexes cover the by-booker and by-item temporal queries
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from shareit.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    booker_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="WAITING")

    # Relationships
    item = relationship("Item", back_populates="bookings", lazy="joined")
    booker = relationship("User", back_populates="bookings", lazy="joined")

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="check_booking_start_before_end"),
        CheckConstraint(
            "status IN ('WAITING', 'APPROVED', 'REJECTED')",
            name="check_booking_status",
        ),
        Index("ix_bookings_booker_start", "booker_id", "start_date"),
        Index("ix_bookings_item_start", "item_id", "start_date"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, item={self.item_id}, booker={self.booker_id}, status={self.status})>"
