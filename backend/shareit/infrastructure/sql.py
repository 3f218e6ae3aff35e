"""
SQLAlchemy-backed store implementations.

All stores share the request's AsyncSession; the session dependency owns the
transaction. Rows are mapped to the domain dataclasses before they leave this
module, with relationships eagerly loaded so nothing lazy-loads later.
Booking and comment reads use populate_existing: a row touched earlier in the
same session is re-read rather than served stale from the identity map.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from shareit.core.logging import get_logger
from shareit.domain.entities import (
    Booking,
    BookingStatus,
    Comment,
    Item,
    NewBooking,
    NewComment,
    User,
)
from shareit.domain.queries import BookingQuery, BookingState, Perspective
from shareit.models import Booking as BookingRow
from shareit.models import Comment as CommentRow
from shareit.models import Item as ItemRow
from shareit.models import User as UserRow
from shareit.services.interfaces import BookingStore, CommentStore, ItemStore, UserStore

logger = get_logger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_user(row: UserRow) -> User:
    return User(id=row.id, name=row.name, email=row.email)


def to_item(row: ItemRow) -> Item:
    return Item(
        id=row.id,
        owner=to_user(row.owner),
        available=row.available,
        name=row.name,
        description=row.description or "",
    )


def to_booking(row: BookingRow) -> Booking:
    return Booking(
        id=row.id,
        item=to_item(row.item),
        requester=to_user(row.booker),
        start=_aware(row.start_date),
        end=_aware(row.end_date),
        status=BookingStatus(row.status),
    )


def to_comment(row: CommentRow) -> Comment:
    return Comment(
        id=row.id,
        text=row.text,
        item_id=row.item_id,
        author=to_user(row.author),
        created=_aware(row.created),
    )


class SqlUserStore(UserStore):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: int) -> Optional[User]:
        row = await self.session.get(UserRow, user_id)
        return to_user(row) if row else None

    async def exists(self, user_id: int) -> bool:
        result = await self.session.execute(select(UserRow.id).where(UserRow.id == user_id))
        return result.scalar_one_or_none() is not None


class SqlItemStore(ItemStore):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, item_id: int) -> Optional[Item]:
        result = await self.session.execute(
            select(ItemRow).options(joinedload(ItemRow.owner)).where(ItemRow.id == item_id)
        )
        row = result.scalar_one_or_none()
        return to_item(row) if row else None

    async def list_by_owner(self, owner_id: int, offset: int, limit: int) -> list[Item]:
        result = await self.session.execute(
            select(ItemRow)
            .options(joinedload(ItemRow.owner))
            .where(ItemRow.owner_id == owner_id)
            .order_by(ItemRow.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [to_item(row) for row in result.scalars().all()]


def _booking_options():
    return (
        joinedload(BookingRow.item).joinedload(ItemRow.owner),
        joinedload(BookingRow.booker),
    )


def _state_clause(state: BookingState, now: datetime):
    if state is BookingState.CURRENT:
        return and_(BookingRow.start_date < now, BookingRow.end_date > now)
    if state is BookingState.PAST:
        return BookingRow.end_date < now
    if state is BookingState.FUTURE:
        return BookingRow.start_date > now
    if state in (BookingState.WAITING, BookingState.REJECTED):
        return BookingRow.status == state.value
    return None


class SqlBookingStore(BookingStore):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, booking: NewBooking) -> Booking:
        row = BookingRow(
            item_id=booking.item.id,
            booker_id=booking.requester.id,
            start_date=booking.start,
            end_date=booking.end,
            status=booking.status.value,
        )
        self.session.add(row)
        await self.session.flush()
        return Booking(
            id=row.id,
            item=booking.item,
            requester=booking.requester,
            start=booking.start,
            end=booking.end,
            status=booking.status,
        )

    async def get(self, booking_id: int) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingRow)
            .options(*_booking_options())
            .where(BookingRow.id == booking_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return to_booking(row) if row else None

    async def compare_and_set_status(
        self,
        booking_id: int,
        expected: BookingStatus,
        new: BookingStatus,
    ) -> bool:
        result = await self.session.execute(
            update(BookingRow)
            .where(
                BookingRow.id == booking_id,
                BookingRow.status == expected.value,
            )
            .values(status=new.value)
        )
        if result.rowcount == 0:
            logger.info("booking_status_cas_missed", booking_id=booking_id, expected=expected.value)
            return False
        return True

    async def find(self, query: BookingQuery) -> list[Booking]:
        stmt = (
            select(BookingRow)
            .options(*_booking_options())
            .execution_options(populate_existing=True)
        )

        if query.perspective is Perspective.BOOKER:
            stmt = stmt.where(BookingRow.booker_id == query.user_id)
        else:
            owned_items = select(ItemRow.id).where(ItemRow.owner_id == query.user_id)
            stmt = stmt.where(BookingRow.item_id.in_(owned_items))

        if query.item_id is not None:
            stmt = stmt.where(BookingRow.item_id == query.item_id)

        clause = _state_clause(query.state, query.now)
        if clause is not None:
            stmt = stmt.where(clause)

        stmt = stmt.order_by(BookingRow.start_date.desc(), BookingRow.id.desc()).offset(query.offset)
        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        result = await self.session.execute(stmt)
        return [to_booking(row) for row in result.scalars().all()]


class SqlCommentStore(CommentStore):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, comment: NewComment) -> Comment:
        row = CommentRow(
            text=comment.text,
            item_id=comment.item_id,
            author_id=comment.author.id,
            created=comment.created,
        )
        self.session.add(row)
        await self.session.flush()
        return Comment(
            id=row.id,
            text=comment.text,
            item_id=comment.item_id,
            author=comment.author,
            created=comment.created,
        )

    async def list_by_items(self, item_ids: Iterable[int]) -> list[Comment]:
        item_ids = list(item_ids)
        if not item_ids:
            return []
        result = await self.session.execute(
            select(CommentRow)
            .options(joinedload(CommentRow.author))
            .where(CommentRow.item_id.in_(item_ids))
            .order_by(CommentRow.created.asc(), CommentRow.id.asc())
            .execution_options(populate_existing=True)
        )
        return [to_comment(row) for row in result.scalars().all()]
