"""
Item booking aggregation and the item views built on it.

For every item of an owner we derive:
- last_booking: the finished booking (end < now) with the latest end
- next_booking: the upcoming booking (start > now) with the earliest start

Derived on every call from the owner's full booking list; nothing is cached
because "now" moves between requests.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from shareit.core.exceptions import NotFoundError
from shareit.domain.entities import Booking, Comment, Item, ItemBookings
from shareit.domain.queries import PageParams, Perspective
from shareit.services import authorization
from shareit.services.backend import Backend
from shareit.services.query_service import collect_bookings


@dataclass(frozen=True)
class ItemView:
    item: Item
    last_booking: Optional[Booking] = None
    next_booking: Optional[Booking] = None
    comments: list[Comment] = field(default_factory=list)


async def aggregate_item_bookings(
    backend: Backend,
    owner_id: int,
    items: Iterable[Item],
) -> list[ItemBookings]:
    items = list(items)
    if not items:
        return []

    bookings = await collect_bookings(backend, Perspective.OWNER, owner_id)
    now = backend.clock.now()

    by_item: dict[int, list[Booking]] = defaultdict(list)
    for booking in bookings:
        by_item[booking.item.id].append(booking)

    result = []
    for item in items:
        item_bookings = by_item.get(item.id, [])
        past = [b for b in item_bookings if b.end < now]
        upcoming = [b for b in item_bookings if b.start > now]
        result.append(
            ItemBookings(
                item=item,
                last_booking=max(past, key=lambda b: b.end, default=None),
                next_booking=min(upcoming, key=lambda b: b.start, default=None),
            )
        )
    return result


async def get_item_view(backend: Backend, user_id: int, item_id: int) -> ItemView:
    """Item detail. Last/next booking are filled in for the owner only."""
    item = await backend.items.get(item_id)
    if item is None:
        raise NotFoundError(f"item with id {item_id} not found")

    comments = await backend.comments.list_by_items([item_id])
    if not authorization.can_see_item_bookings(user_id, item):
        return ItemView(item=item, comments=comments)

    [aggregated] = await aggregate_item_bookings(backend, item.owner.id, [item])
    return ItemView(
        item=item,
        last_booking=aggregated.last_booking,
        next_booking=aggregated.next_booking,
        comments=comments,
    )


async def list_owner_items(
    backend: Backend,
    owner_id: int,
    page: Optional[PageParams] = None,
) -> list[ItemView]:
    """Owner's items, newest first, each with last/next booking and comments."""
    page = page or PageParams()
    if not await backend.users.exists(owner_id):
        raise NotFoundError(f"no user with id {owner_id}")

    items = await backend.items.list_by_owner(owner_id, page.offset, page.size)
    aggregated = await aggregate_item_bookings(backend, owner_id, items)

    comments_by_item: dict[int, list[Comment]] = defaultdict(list)
    for comment in await backend.comments.list_by_items([item.id for item in items]):
        comments_by_item[comment.item_id].append(comment)

    return [
        ItemView(
            item=entry.item,
            last_booking=entry.last_booking,
            next_booking=entry.next_booking,
            comments=comments_by_item.get(entry.item.id, []),
        )
        for entry in aggregated
    ]
