"""
Store interfaces the booking core depends on.

The services only ever talk to these; implementations:
- shareit.infrastructure.sql: SQLAlchemy async session (PostgreSQL)
- shareit.infrastructure.memory: process-local dictionaries
"""

from abc import ABC, abstractmethod
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
from shareit.domain.queries import BookingQuery


class UserStore(ABC):

    @abstractmethod
    async def get(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def exists(self, user_id: int) -> bool:
        pass


class ItemStore(ABC):

    @abstractmethod
    async def get(self, item_id: int) -> Optional[Item]:
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: int, offset: int, limit: int) -> list[Item]:
        """Owner's items, newest (highest id) first."""
        pass


class BookingStore(ABC):

    @abstractmethod
    async def insert(self, booking: NewBooking) -> Booking:
        pass

    @abstractmethod
    async def get(self, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def compare_and_set_status(
        self,
        booking_id: int,
        expected: BookingStatus,
        new: BookingStatus,
    ) -> bool:
        """
        Atomically set status to `new` if it currently equals `expected`.

        Returns:
            True if the write happened, False if the status had changed
        """
        pass

    @abstractmethod
    async def find(self, query: BookingQuery) -> list[Booking]:
        """
        Bookings matching the query, start descending, paged after filtering.
        See shareit.domain.queries for the predicate table.
        """
        pass


class CommentStore(ABC):

    @abstractmethod
    async def insert(self, comment: NewComment) -> Comment:
        pass

    @abstractmethod
    async def list_by_items(self, item_ids: Iterable[int]) -> list[Comment]:
        """Comments on any of the given items, oldest first."""
        pass
