"""
Request-scoped dependencies: the acting user and the storage backend.
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from shareit.core.config import get_settings
from shareit.db.session import get_db
from shareit.services.backend import Backend, build_backend

settings = get_settings()


async def get_current_user_id(
    user_id: int = Header(..., alias=settings.USER_ID_HEADER),
) -> int:
    """Caller identity comes from the sharer header, set by the gateway."""
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


async def get_backend(db: AsyncSession = Depends(get_db)) -> Backend:
    return build_backend(db)
