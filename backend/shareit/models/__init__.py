from shareit.models.user import User
from shareit.models.item import Item
from shareit.models.booking import Booking
from shareit.models.comment import Comment

__all__ = ["User", "Item", "Booking", "Comment"]
