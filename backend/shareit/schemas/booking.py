"""
Pydantic schemas for booking-related request/response validation.

Two views of a booking leave the service:
- BookingResponse: list and detail view, with nested item and booker
- BookingShort: nested inside an item (last/next booking)
"""

from datetime import datetime, timezone

from pydantic import BaseModel, field_validator

from shareit.domain.entities import Booking, BookingStatus


class BookingCreate(BaseModel):
    item_id: int
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Timestamps without an offset are taken as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class UserRef(BaseModel):
    id: int
    name: str


class ItemRef(BaseModel):
    id: int
    name: str


class BookingResponse(BaseModel):
    id: int
    start: datetime
    end: datetime
    status: BookingStatus
    item: ItemRef
    booker: UserRef


class BookingShort(BaseModel):
    id: int
    booker_id: int
    start: datetime
    end: datetime
    status: BookingStatus


def to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        start=booking.start,
        end=booking.end,
        status=booking.status,
        item=ItemRef(id=booking.item.id, name=booking.item.name),
        booker=UserRef(id=booking.requester.id, name=booking.requester.name),
    )


def to_booking_short(booking: Booking) -> BookingShort:
    return BookingShort(
        id=booking.id,
        booker_id=booking.requester.id,
        start=booking.start,
        end=booking.end,
        status=booking.status,
    )
