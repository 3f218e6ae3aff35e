from shareit.domain.entities import (
    Booking, BookingStatus, Comment, Item, ItemBookings, NewBooking, NewComment, User,
)
from shareit.domain.queries import BookingQuery, BookingState, PageParams, Perspective

__all__ = [
    "Booking", "BookingStatus", "Comment", "Item", "ItemBookings",
    "NewBooking", "NewComment", "User",
    "BookingQuery", "BookingState", "PageParams", "Perspective",
]
