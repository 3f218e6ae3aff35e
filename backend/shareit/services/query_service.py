"""
Temporal query engine: a user's bookings partitioned by state.

"now" is read once per call from the backend clock so every predicate in a
request sees the same instant. Pagination always applies to the filtered,
ordered result, never to the raw list.
"""

from typing import Optional

from shareit.core.exceptions import NotFoundError
from shareit.core.metrics import record_query
from shareit.domain.entities import Booking
from shareit.domain.queries import BookingQuery, BookingState, PageParams, Perspective
from shareit.services.backend import Backend


async def list_bookings(
    backend: Backend,
    perspective: Perspective,
    user_id: int,
    state: str = "ALL",
    page: Optional[PageParams] = None,
) -> list[Booking]:
    """
    Page through a booker's or an owner's bookings in the given state.

    Raises:
        UnsupportedStateError: unknown state keyword (checked first)
        NotFoundError: unknown user
    """
    parsed = BookingState.parse(state)
    page = page or PageParams()
    await _require_user(backend, user_id)

    record_query(perspective.value, parsed.value)
    return await backend.bookings.find(
        BookingQuery(
            perspective=perspective,
            user_id=user_id,
            state=parsed,
            now=backend.clock.now(),
            offset=page.offset,
            limit=page.size,
        )
    )


async def collect_bookings(
    backend: Backend,
    perspective: Perspective,
    user_id: int,
    state: BookingState = BookingState.ALL,
    item_id: Optional[int] = None,
) -> list[Booking]:
    """Unpaged variant for internal consumers; optionally narrowed to one item."""
    return await backend.bookings.find(
        BookingQuery(
            perspective=perspective,
            user_id=user_id,
            state=state,
            now=backend.clock.now(),
            item_id=item_id,
        )
    )


async def _require_user(backend: Backend, user_id: int) -> None:
    if not await backend.users.exists(user_id):
        raise NotFoundError(f"no bookings for user with id {user_id}")
