from shareit.schemas.booking import (
    BookingCreate, BookingResponse, BookingShort, to_booking_response, to_booking_short,
)
from shareit.schemas.comment import CommentCreate, CommentResponse, to_comment_response
from shareit.schemas.item import ItemResponse, to_item_response

__all__ = [
    "BookingCreate", "BookingResponse", "BookingShort",
    "to_booking_response", "to_booking_short",
    "CommentCreate", "CommentResponse", "to_comment_response",
    "ItemResponse", "to_item_response",
]
