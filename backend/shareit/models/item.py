"""
Item model: something an owner lends out.

`available` is maintained by the owner; bookings read it but never change it.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from shareit.db.base import Base, TimestampMixin


class Item(Base, TimestampMixin):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    available = Column(Boolean, nullable=False, default=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="items", lazy="joined")
    bookings = relationship("Booking", back_populates="item")
    comments = relationship("Comment", back_populates="item")

    __table_args__ = (
        # Owner listing: WHERE owner_id = ? ORDER BY id DESC
        Index("ix_items_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name}, available={self.available})>"
