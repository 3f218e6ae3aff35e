"""
Pydantic schemas for item views.
"""

from typing import Optional

from pydantic import BaseModel

from shareit.schemas.booking import BookingShort, to_booking_short
from shareit.schemas.comment import CommentResponse, to_comment_response


class ItemResponse(BaseModel):
    id: int
    name: str
    description: str
    available: bool
    owner_id: int
    last_booking: Optional[BookingShort] = None
    next_booking: Optional[BookingShort] = None
    comments: list[CommentResponse] = []


def to_item_response(view) -> ItemResponse:
    """Project an ItemView (see shareit.services.item_service)."""
    item = view.item
    return ItemResponse(
        id=item.id,
        name=item.name,
        description=item.description,
        available=item.available,
        owner_id=item.owner.id,
        last_booking=to_booking_short(view.last_booking) if view.last_booking else None,
        next_booking=to_booking_short(view.next_booking) if view.next_booking else None,
        comments=[to_comment_response(c) for c in view.comments],
    )
