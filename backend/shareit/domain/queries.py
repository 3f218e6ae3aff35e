"""
Temporal partitioning of bookings.

A BookingQuery describes one slice of a user's bookings: whose bookings
(perspective), which partition (state) relative to a fixed instant, and which
pagination window. Stores translate it into their own query language; the
predicates below are the reference semantics both stores follow.

    state      predicate (relative to now)
    ---------  ---------------------------
    ALL        none
    CURRENT    start < now < end
    PAST       end < now
    FUTURE     start > now
    WAITING    status == WAITING
    REJECTED   status == REJECTED

Results are ordered by start descending (id descending on ties) and paged
after filtering.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from shareit.core.exceptions import InvalidArgumentError, UnsupportedStateError
from shareit.domain.entities import Booking, BookingStatus


class Perspective(str, Enum):
    BOOKER = "BOOKER"
    OWNER = "OWNER"


class BookingState(str, Enum):
    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: str) -> "BookingState":
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedStateError(value) from None


MAX_PAGE_SIZE = 20


@dataclass(frozen=True)
class PageParams:
    offset: int = 0
    size: int = MAX_PAGE_SIZE

    def __post_init__(self):
        if self.offset < 0:
            raise InvalidArgumentError(f"from must be >= 0, got {self.offset}")
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise InvalidArgumentError(
                f"size must be between 1 and {MAX_PAGE_SIZE}, got {self.size}"
            )


@dataclass(frozen=True)
class BookingQuery:
    perspective: Perspective
    user_id: int
    state: BookingState
    now: datetime
    item_id: Optional[int] = None
    offset: int = 0
    limit: Optional[int] = None  # None means unpaged


def belongs_to(booking: Booking, perspective: Perspective, user_id: int) -> bool:
    if perspective is Perspective.BOOKER:
        return booking.requester.id == user_id
    return booking.item.owner.id == user_id


def in_state(booking: Booking, state: BookingState, now: datetime) -> bool:
    if state is BookingState.ALL:
        return True
    if state is BookingState.CURRENT:
        return booking.start < now < booking.end
    if state is BookingState.PAST:
        return booking.end < now
    if state is BookingState.FUTURE:
        return booking.start > now
    return booking.status == BookingStatus(state.value)


def matches(booking: Booking, query: BookingQuery) -> bool:
    if query.item_id is not None and booking.item.id != query.item_id:
        return False
    return (
        belongs_to(booking, query.perspective, query.user_id)
        and in_state(booking, query.state, query.now)
    )


def apply_query(bookings: Iterable[Booking], query: BookingQuery) -> list[Booking]:
    """Filter, order and page an in-memory collection of bookings."""
    selected = [b for b in bookings if matches(b, query)]
    selected.sort(key=lambda b: (b.start, b.id), reverse=True)
    if query.limit is None:
        return selected[query.offset:]
    return selected[query.offset:query.offset + query.limit]
