"""
Pytest fixtures: an in-memory backend on a frozen clock, seeded users and
items, and an HTTP client wired to that backend.

The clock is frozen at NOW so past/current/future partitions are exact.
"""

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from shareit.api.deps import get_backend
from shareit.core.clock import FixedClock
from shareit.domain.entities import BookingStatus, NewBooking
from shareit.main import app
from shareit.services.backend import Backend, memory_backend

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def backend(clock: FixedClock) -> Backend:
    return memory_backend(clock)


@pytest.fixture
def owner(backend: Backend):
    return backend.users.add(name="Olga Owner", email="owner@example.com")


@pytest.fixture
def booker(backend: Backend):
    return backend.users.add(name="Boris Booker", email="booker@example.com")


@pytest.fixture
def stranger(backend: Backend):
    return backend.users.add(name="Sam Stranger", email="stranger@example.com")


@pytest.fixture
def item(backend: Backend, owner):
    return backend.items.add(owner, name="Drill", description="Cordless drill", available=True)


@pytest.fixture
def unavailable_item(backend: Backend, owner):
    return backend.items.add(owner, name="Ladder", description="Broken ladder", available=False)


@pytest.fixture
def add_booking(backend: Backend):
    """Insert a booking directly, bypassing the state machine checks."""

    async def _add(item, requester, start, end, status=BookingStatus.WAITING):
        return await backend.bookings.insert(
            NewBooking(item=item, requester=requester, start=start, end=end, status=status)
        )

    return _add


@pytest_asyncio.fixture
async def client(backend: Backend) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the backend dependency with the test backend."""
    app.dependency_overrides[get_backend] = lambda: backend

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def headers():
    """Sharer header identifying the calling user."""

    def _headers(user) -> dict:
        return {"X-Sharer-User-Id": str(user.id)}

    return _headers
