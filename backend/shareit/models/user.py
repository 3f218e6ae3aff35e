"""
User model. Account management lives elsewhere; the booking core only
looks users up by id.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from shareit.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(512), unique=True, index=True, nullable=False)

    # Relationships
    items = relationship("Item", back_populates="owner")
    bookings = relationship("Booking", back_populates="booker")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
