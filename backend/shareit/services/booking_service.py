"""
Booking state machine.

    WAITING --approve--> APPROVED
    WAITING --reject---> REJECTED
    REJECTED --reject--> REJECTED   (tolerated, status rewritten as is)

CONCURRENCY STRATEGY: Compare-and-set on status
================================================

Problem:
  The owner double-clicks "approve" and "reject", or two tabs race.
  Both requests read status=WAITING, both pass the checks, both write.
  Result: the booking flips twice and both callers see success.

Solution:
  The status write is conditional on the status we validated:

  UPDATE bookings SET status = :new WHERE id = :id AND status = :expected

  If no row matched, another request won the race and this one fails with a
  conflict. No retries: the caller has to look at the new state and decide
  again. There is no cross-booking lock because nothing here checks
  overlapping reservations.
"""

from dataclasses import replace
from datetime import datetime

from shareit.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from shareit.core.logging import get_logger
from shareit.core.metrics import booking_latency, record_transition
from shareit.domain.entities import Booking, BookingStatus, NewBooking
from shareit.services import authorization
from shareit.services.backend import Backend

logger = get_logger(__name__)


async def create_booking(
    backend: Backend,
    requester_id: int,
    item_id: int,
    start: datetime,
    end: datetime,
) -> Booking:
    """
    Reserve an item for [start, end).
    Checks run in a fixed order and the first failure wins.
    """
    with booking_latency.labels(operation="create").time():
        item = await backend.items.get(item_id)
        if item is None:
            raise NotFoundError(f"Cannot make booking. Item with id {item_id} not found")

        requester = await backend.users.get(requester_id)
        if requester is None:
            raise NotFoundError(f"Cannot make booking. User with id {requester_id} not found")

        if not authorization.can_book(requester_id, item):
            logger.warning("booking_refused", reason="self_booking", item_id=item_id, user_id=requester_id)
            record_transition("refused")
            raise ConflictError(f"self-booking: item {item_id} belongs to user {requester_id}")

        if not item.available:
            logger.warning("booking_refused", reason="item_unavailable", item_id=item_id, user_id=requester_id)
            record_transition("refused")
            raise ConflictError(f"item unavailable: item {item_id} cannot be booked")

        if not start < end:
            record_transition("refused")
            raise InvalidArgumentError("start after end: end of the booking has to be after its start")

        booking = await backend.bookings.insert(
            NewBooking(item=item, requester=requester, start=start, end=end)
        )

    logger.info(
        "booking_created",
        booking_id=booking.id,
        item_id=item_id,
        user_id=requester_id,
        start=start.isoformat(),
        end=end.isoformat(),
    )
    record_transition("created")
    return booking


async def approve_booking(
    backend: Backend,
    booking_id: int,
    acting_user_id: int,
    approved: bool,
) -> Booking:
    """
    Approve or reject a booking on behalf of the item owner.

    An APPROVED booking can never change again. A REJECTED booking may be
    rejected again but not approved.
    """
    with booking_latency.labels(operation="approve").time():
        booking = await backend.bookings.get(booking_id)
        if booking is None:
            raise NotFoundError(f"no booking with id {booking_id}")

        if not await backend.users.exists(acting_user_id):
            raise NotFoundError(f"no user with id {acting_user_id}")

        if not authorization.can_decide(acting_user_id, booking):
            logger.warning("approval_refused", reason="wrong_owner", booking_id=booking_id, user_id=acting_user_id)
            record_transition("refused")
            raise ForbiddenError(
                f"wrong owner: user {acting_user_id} is not an owner of item {booking.item.id}"
            )

        if booking.status is BookingStatus.APPROVED:
            record_transition("refused")
            raise ConflictError(f"already approved: booking {booking_id}")

        if booking.status is BookingStatus.REJECTED and approved:
            record_transition("refused")
            raise ConflictError(f"already rejected: booking {booking_id}")

        new_status = BookingStatus.APPROVED if approved else BookingStatus.REJECTED
        swapped = await backend.bookings.compare_and_set_status(booking_id, booking.status, new_status)
        if not swapped:
            logger.info("approval_lost_race", booking_id=booking_id, expected=booking.status.value)
            record_transition("refused")
            raise ConflictError(f"booking {booking_id} was updated concurrently")

    logger.info(
        "booking_approved" if approved else "booking_rejected",
        booking_id=booking_id,
        user_id=acting_user_id,
    )
    record_transition(new_status.value.lower())
    return replace(booking, status=new_status)


async def get_booking(backend: Backend, booking_id: int, requesting_user_id: int) -> Booking:
    """
    Get a booking visible to the booker or the item owner.
    Anyone else gets the same not-found as for an unknown id.
    """
    booking = await backend.bookings.get(booking_id)
    if booking is None or not authorization.can_view(requesting_user_id, booking):
        raise NotFoundError(
            f"there is no booking with id {booking_id} visible to user {requesting_user_id}"
        )
    return booking
