"""
Canonical value types for the booking core.

Stores hand these out instead of ORM rows, so the services never depend on a
session being open. All datetimes are timezone-aware (UTC).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class BookingStatus(str, Enum):
    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class User:
    id: int
    name: str = ""
    email: str = ""


@dataclass(frozen=True)
class Item:
    id: int
    owner: User
    available: bool
    name: str = ""
    description: str = ""

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner.id == user_id


@dataclass(frozen=True)
class Booking:
    id: int
    item: Item
    requester: User
    start: datetime
    end: datetime
    status: BookingStatus


@dataclass(frozen=True)
class NewBooking:
    """Booking payload before the store assigns an id."""
    item: Item
    requester: User
    start: datetime
    end: datetime
    status: BookingStatus = BookingStatus.WAITING


@dataclass(frozen=True)
class Comment:
    id: int
    text: str
    item_id: int
    author: User
    created: datetime


@dataclass(frozen=True)
class NewComment:
    text: str
    item_id: int
    author: User
    created: datetime


@dataclass(frozen=True)
class ItemBookings:
    """Last finished and next upcoming booking of one item."""
    item: Item
    last_booking: Optional[Booking] = None
    next_booking: Optional[Booking] = None
