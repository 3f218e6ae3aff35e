"""
Tests for the SQLAlchemy stores against a throwaway SQLite database.

Each test gets a fresh database file; rows are seeded through the ORM models
and the booking services run on top of sql_backend().
"""

from datetime import timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from shareit.core.exceptions import ConflictError
from shareit.db.base import Base
from shareit.domain.entities import BookingStatus, NewBooking
from shareit.domain.queries import PageParams, Perspective
from shareit.models import Item as ItemRow
from shareit.models import User as UserRow
from shareit.services.backend import Backend, sql_backend
from shareit.services.booking_service import approve_booking, create_booking
from shareit.services.comment_service import add_comment
from shareit.services.item_service import list_owner_items
from shareit.services.query_service import list_bookings

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)


@pytest_asyncio.fixture
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Create tables in a temp SQLite file, yield a session, then dispose."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shareit.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(db_session: AsyncSession):
    owner = UserRow(name="Olga Owner", email="owner@example.com")
    booker = UserRow(name="Boris Booker", email="booker@example.com")
    db_session.add_all([owner, booker])
    await db_session.flush()

    drill = ItemRow(name="Drill", description="Cordless drill", available=True, owner_id=owner.id)
    ladder = ItemRow(name="Ladder", description="Broken", available=False, owner_id=owner.id)
    db_session.add_all([drill, ladder])
    await db_session.commit()
    return {"owner": owner.id, "booker": booker.id, "drill": drill.id, "ladder": ladder.id}


@pytest.fixture
def sql(db_session: AsyncSession, clock) -> Backend:
    return sql_backend(db_session, clock)


@pytest.mark.asyncio
async def test_lookups_map_rows_to_domain(sql: Backend, seeded):
    owner = await sql.users.get(seeded["owner"])
    drill = await sql.items.get(seeded["drill"])

    assert owner.name == "Olga Owner"
    assert drill.owner == owner
    assert drill.available is True
    assert await sql.users.exists(seeded["booker"]) is True
    assert await sql.users.exists(999) is False
    assert await sql.items.get(999) is None


@pytest.mark.asyncio
async def test_create_and_approve_round_trip(sql: Backend, clock, seeded):
    now = clock.now()
    booking = await create_booking(sql, seeded["booker"], seeded["drill"], now + HOUR, now + DAY)
    assert booking.status is BookingStatus.WAITING

    approved = await approve_booking(sql, booking.id, seeded["owner"], True)
    stored = await sql.bookings.get(booking.id)

    assert approved.status is BookingStatus.APPROVED
    assert stored.status is BookingStatus.APPROVED
    assert stored.start == now + HOUR
    assert stored.end == now + DAY
    assert stored.requester.id == seeded["booker"]
    assert stored.item.owner.id == seeded["owner"]

    with pytest.raises(ConflictError):
        await approve_booking(sql, booking.id, seeded["owner"], True)


@pytest.mark.asyncio
async def test_unavailable_item(sql: Backend, clock, seeded):
    now = clock.now()
    with pytest.raises(ConflictError):
        await create_booking(sql, seeded["booker"], seeded["ladder"], now + HOUR, now + DAY)


@pytest.mark.asyncio
async def test_compare_and_set_status(sql: Backend, clock, seeded):
    now = clock.now()
    booking = await create_booking(sql, seeded["booker"], seeded["drill"], now + HOUR, now + DAY)

    assert await sql.bookings.compare_and_set_status(
        booking.id, BookingStatus.REJECTED, BookingStatus.APPROVED
    ) is False
    assert await sql.bookings.compare_and_set_status(
        booking.id, BookingStatus.WAITING, BookingStatus.REJECTED
    ) is True


@pytest.mark.asyncio
async def test_state_queries_match_in_memory_semantics(sql: Backend, clock, seeded):
    now = clock.now()
    booker = await sql.users.get(seeded["booker"])
    drill = await sql.items.get(seeded["drill"])

    async def insert(start, end, status=BookingStatus.WAITING):
        return await sql.bookings.insert(
            NewBooking(item=drill, requester=booker, start=start, end=end, status=status)
        )

    past = await insert(now - 3 * DAY, now - 2 * DAY, BookingStatus.APPROVED)
    current = await insert(now - HOUR, now + HOUR, BookingStatus.APPROVED)
    future = await insert(now + DAY, now + 2 * DAY)
    rejected = await insert(now + 3 * DAY, now + 4 * DAY, BookingStatus.REJECTED)

    async def ids(perspective, user_id, state, page=None):
        return [b.id for b in await list_bookings(sql, perspective, user_id, state, page)]

    assert await ids(Perspective.BOOKER, booker.id, "ALL") == [rejected.id, future.id, current.id, past.id]
    assert await ids(Perspective.BOOKER, booker.id, "CURRENT") == [current.id]
    assert await ids(Perspective.BOOKER, booker.id, "PAST") == [past.id]
    assert await ids(Perspective.BOOKER, booker.id, "FUTURE") == [rejected.id, future.id]
    assert await ids(Perspective.BOOKER, booker.id, "WAITING") == [future.id]
    assert await ids(Perspective.OWNER, seeded["owner"], "REJECTED") == [rejected.id]
    assert await ids(Perspective.OWNER, seeded["owner"], "ALL", PageParams(offset=1, size=2)) == [future.id, current.id]
    assert await ids(Perspective.OWNER, booker.id, "ALL") == []


@pytest.mark.asyncio
async def test_owner_listing_and_comments(sql: Backend, clock, seeded):
    now = clock.now()
    booker = await sql.users.get(seeded["booker"])
    drill = await sql.items.get(seeded["drill"])
    past = await sql.bookings.insert(
        NewBooking(item=drill, requester=booker, start=now - 2 * DAY, end=now - DAY)
    )

    comment = await add_comment(sql, booker.id, drill.id, "Works")
    views = await list_owner_items(sql, seeded["owner"])

    assert [v.item.id for v in views] == [seeded["ladder"], seeded["drill"]]
    drill_view = views[1]
    assert drill_view.last_booking.id == past.id
    assert drill_view.next_booking is None
    assert [c.id for c in drill_view.comments] == [comment.id]
    assert drill_view.comments[0].author.name == "Boris Booker"
