"""
Backend bundle handed to every service call, and the factory that builds it.

Storage selection mirrors STORAGE_BACKEND:
- sql: stores bound to the request's AsyncSession
- memory: one process-wide set of in-memory stores (single worker only)
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.core.clock import Clock, SystemClock
from shareit.core.config import get_settings
from shareit.services.interfaces import BookingStore, CommentStore, ItemStore, UserStore


@dataclass
class Backend:
    users: UserStore
    items: ItemStore
    bookings: BookingStore
    comments: CommentStore
    clock: Clock = field(default_factory=SystemClock)


def sql_backend(session: AsyncSession, clock: Optional[Clock] = None) -> Backend:
    from shareit.infrastructure.sql import (
        SqlBookingStore,
        SqlCommentStore,
        SqlItemStore,
        SqlUserStore,
    )

    return Backend(
        users=SqlUserStore(session),
        items=SqlItemStore(session),
        bookings=SqlBookingStore(session),
        comments=SqlCommentStore(session),
        clock=clock or SystemClock(),
    )


def memory_backend(clock: Optional[Clock] = None) -> Backend:
    from shareit.infrastructure.memory import InMemoryStorage

    storage = InMemoryStorage()
    return Backend(
        users=storage.users,
        items=storage.items,
        bookings=storage.bookings,
        comments=storage.comments,
        clock=clock or SystemClock(),
    )


@lru_cache()
def get_shared_memory_backend() -> Backend:
    return memory_backend()


def build_backend(session: AsyncSession) -> Backend:
    """
    Get the configured backend for one request.

    Can be switched via STORAGE_BACKEND env var.
    """
    if get_settings().STORAGE_BACKEND == "memory":
        return get_shared_memory_backend()
    return sql_backend(session)
