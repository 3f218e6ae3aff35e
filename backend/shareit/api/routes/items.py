"""
Item views with last/next booking, and comment posting.
"""

from fastapi import APIRouter, Depends, status

from shareit.api.deps import get_backend, get_current_user_id
from shareit.api.routes.bookings import page_params
from shareit.domain.queries import PageParams
from shareit.schemas.comment import CommentCreate, CommentResponse, to_comment_response
from shareit.schemas.item import ItemResponse, to_item_response
from shareit.services.backend import Backend
from shareit.services.comment_service import add_comment
from shareit.services.item_service import get_item_view, list_owner_items

router = APIRouter(prefix="/items", tags=["Items"])


@router.get("", response_model=list[ItemResponse])
async def list_items_endpoint(
    page: PageParams = Depends(page_params),
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Caller's own items, newest first, with last and next booking."""
    views = await list_owner_items(backend, user_id, page)
    return [to_item_response(v) for v in views]


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item_endpoint(
    item_id: int,
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """
    Item detail with comments.
    Last/next booking are only filled in when the caller owns the item.
    """
    view = await get_item_view(backend, user_id, item_id)
    return to_item_response(view)


@router.post("/{item_id}/comment", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def post_comment_endpoint(
    item_id: int,
    comment_data: CommentCreate,
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Comment on an item the caller has finished a booking of."""
    comment = await add_comment(backend, user_id, item_id, comment_data.text)
    return to_comment_response(comment)
