"""
Authorization rules for bookings and items.

Pure predicates over domain values; the services decide which error to raise
when a rule does not hold.
"""

from shareit.domain.entities import Booking, Item


def is_owner(user_id: int, item: Item) -> bool:
    return item.owner.id == user_id


def is_booker(user_id: int, booking: Booking) -> bool:
    return booking.requester.id == user_id


def can_book(user_id: int, item: Item) -> bool:
    """Owners may not book their own items."""
    return not is_owner(user_id, item)


def can_decide(user_id: int, booking: Booking) -> bool:
    """Only the item owner approves or rejects a booking."""
    return is_owner(user_id, booking.item)


def can_view(user_id: int, booking: Booking) -> bool:
    """Booker and item owner can see a booking; nobody else can."""
    return is_booker(user_id, booking) or is_owner(user_id, booking.item)


def can_see_item_bookings(user_id: int, item: Item) -> bool:
    """Last/next booking of an item is shown to its owner only."""
    return is_owner(user_id, item)
