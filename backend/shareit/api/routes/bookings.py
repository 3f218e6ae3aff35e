"""
Booking endpoints: create, approve/reject, get, and temporal listings.
"""

from fastapi import APIRouter, Depends, Query, status

from shareit.api.deps import get_backend, get_current_user_id
from shareit.domain.queries import MAX_PAGE_SIZE, PageParams, Perspective
from shareit.schemas.booking import BookingCreate, BookingResponse, to_booking_response
from shareit.services.backend import Backend
from shareit.services.booking_service import approve_booking, create_booking, get_booking
from shareit.services.query_service import list_bookings

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def page_params(
    offset: int = Query(0, alias="from", ge=0),
    size: int = Query(MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(offset=offset, size=size)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """
    Request an item for a time window.
    The booking starts out WAITING until the item owner decides.
    """
    booking = await create_booking(
        backend, user_id, booking_data.item_id, booking_data.start, booking_data.end
    )
    return to_booking_response(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def decide_booking_endpoint(
    booking_id: int,
    approved: bool = Query(...),
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Approve (approved=true) or reject (approved=false). Item owner only."""
    booking = await approve_booking(backend, booking_id, user_id, approved)
    return to_booking_response(booking)


@router.get("/owner", response_model=list[BookingResponse])
async def list_owner_bookings(
    state: str = Query("ALL"),
    page: PageParams = Depends(page_params),
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Bookings of items the caller owns."""
    bookings = await list_bookings(backend, Perspective.OWNER, user_id, state, page)
    return [to_booking_response(b) for b in bookings]


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking_endpoint(
    booking_id: int,
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    booking = await get_booking(backend, booking_id, user_id)
    return to_booking_response(booking)


@router.get("", response_model=list[BookingResponse])
async def list_booker_bookings(
    state: str = Query("ALL"),
    page: PageParams = Depends(page_params),
    user_id: int = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Bookings the caller made."""
    bookings = await list_bookings(backend, Perspective.BOOKER, user_id, state, page)
    return [to_booking_response(b) for b in bookings]
