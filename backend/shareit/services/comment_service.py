"""
Comment eligibility gate.

A user may comment on an item only after one of their bookings of that item
has ended. Booking status is not consulted.
"""

from shareit.core.exceptions import CommentConsistencyError, NotFoundError
from shareit.core.logging import get_logger
from shareit.core.metrics import record_comment_attempt
from shareit.domain.entities import Comment, NewComment
from shareit.domain.queries import BookingState, Perspective
from shareit.services.backend import Backend
from shareit.services.query_service import collect_bookings

logger = get_logger(__name__)


async def can_comment(backend: Backend, author_id: int, item_id: int) -> bool:
    past = await collect_bookings(
        backend,
        Perspective.BOOKER,
        author_id,
        state=BookingState.PAST,
        item_id=item_id,
    )
    return len(past) > 0


async def add_comment(backend: Backend, author_id: int, item_id: int, text: str) -> Comment:
    item = await backend.items.get(item_id)
    if item is None:
        raise NotFoundError(f"item with id {item_id} not found")

    author = await backend.users.get(author_id)
    if author is None:
        raise NotFoundError(f"user with id {author_id} not found")

    if not await can_comment(backend, author_id, item_id):
        logger.warning("comment_rejected", item_id=item_id, user_id=author_id)
        record_comment_attempt(False)
        raise CommentConsistencyError(
            f"user with id {author_id} cannot leave comment for booking "
            f"which is still current or in future"
        )

    comment = await backend.comments.insert(
        NewComment(text=text, item_id=item_id, author=author, created=backend.clock.now())
    )
    logger.info("comment_added", comment_id=comment.id, item_id=item_id, user_id=author_id)
    record_comment_attempt(True)
    return comment
