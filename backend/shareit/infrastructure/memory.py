"""
In-memory store implementations.

Process-local; used by the test suite and by STORAGE_BACKEND=memory for local
runs. Booking status writes are serialized by an asyncio.Lock so that the
compare-and-set has the same semantics as the conditional UPDATE of the SQL
store.
"""

import asyncio
from dataclasses import replace
from itertools import count
from typing import Iterable, Optional

from shareit.domain.entities import (
    Booking,
    BookingStatus,
    Comment,
    Item,
    NewBooking,
    NewComment,
    User,
)
from shareit.domain.queries import BookingQuery, apply_query
from shareit.services.interfaces import BookingStore, CommentStore, ItemStore, UserStore


class InMemoryUserStore(UserStore):

    def __init__(self):
        self._users: dict[int, User] = {}
        self._ids = count(1)

    def add(self, name: str = "", email: str = "") -> User:
        user = User(id=next(self._ids), name=name, email=email)
        self._users[user.id] = user
        return user

    async def get(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def exists(self, user_id: int) -> bool:
        return user_id in self._users


class InMemoryItemStore(ItemStore):

    def __init__(self):
        self._items: dict[int, Item] = {}
        self._ids = count(1)

    def add(self, owner: User, name: str = "", description: str = "", available: bool = True) -> Item:
        item = Item(
            id=next(self._ids),
            owner=owner,
            available=available,
            name=name,
            description=description,
        )
        self._items[item.id] = item
        return item

    def set_available(self, item_id: int, available: bool) -> Item:
        item = replace(self._items[item_id], available=available)
        self._items[item_id] = item
        return item

    async def get(self, item_id: int) -> Optional[Item]:
        return self._items.get(item_id)

    async def list_by_owner(self, owner_id: int, offset: int, limit: int) -> list[Item]:
        owned = sorted(
            (item for item in self._items.values() if item.owner.id == owner_id),
            key=lambda item: item.id,
            reverse=True,
        )
        return owned[offset:offset + limit]


class InMemoryBookingStore(BookingStore):

    def __init__(self):
        self._bookings: dict[int, Booking] = {}
        self._ids = count(1)
        self._lock = asyncio.Lock()

    async def insert(self, booking: NewBooking) -> Booking:
        stored = Booking(
            id=next(self._ids),
            item=booking.item,
            requester=booking.requester,
            start=booking.start,
            end=booking.end,
            status=booking.status,
        )
        self._bookings[stored.id] = stored
        return stored

    async def get(self, booking_id: int) -> Optional[Booking]:
        return self._bookings.get(booking_id)

    async def compare_and_set_status(
        self,
        booking_id: int,
        expected: BookingStatus,
        new: BookingStatus,
    ) -> bool:
        async with self._lock:
            current = self._bookings.get(booking_id)
            if current is None or current.status is not expected:
                return False
            self._bookings[booking_id] = replace(current, status=new)
            return True

    async def find(self, query: BookingQuery) -> list[Booking]:
        return apply_query(self._bookings.values(), query)


class InMemoryCommentStore(CommentStore):

    def __init__(self):
        self._comments: dict[int, Comment] = {}
        self._ids = count(1)

    async def insert(self, comment: NewComment) -> Comment:
        stored = Comment(
            id=next(self._ids),
            text=comment.text,
            item_id=comment.item_id,
            author=comment.author,
            created=comment.created,
        )
        self._comments[stored.id] = stored
        return stored

    async def list_by_items(self, item_ids: Iterable[int]) -> list[Comment]:
        wanted = set(item_ids)
        return [c for c in self._comments.values() if c.item_id in wanted]


class InMemoryStorage:
    """One consistent set of in-memory stores."""

    def __init__(self):
        self.users = InMemoryUserStore()
        self.items = InMemoryItemStore()
        self.bookings = InMemoryBookingStore()
        self.comments = InMemoryCommentStore()
