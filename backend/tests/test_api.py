"""
Tests for the HTTP surface: status codes, error bodies and projections.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from shareit.domain.entities import BookingStatus

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)


def booking_body(item, start, end) -> dict:
    return {"item_id": item.id, "start": start.isoformat(), "end": end.isoformat()}


@pytest.mark.asyncio
async def test_create_then_approve_flow(client: AsyncClient, clock, headers, owner, booker, item):
    now = clock.now()
    response = await client.post(
        "/api/v1/bookings",
        json=booking_body(item, now + HOUR, now + DAY),
        headers=headers(booker),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "WAITING"
    assert data["item"] == {"id": item.id, "name": "Drill"}
    assert data["booker"] == {"id": booker.id, "name": "Boris Booker"}

    booking_id = data["id"]
    approve = await client.patch(
        f"/api/v1/bookings/{booking_id}",
        params={"approved": "true"},
        headers=headers(owner),
    )
    assert approve.status_code == 200
    assert approve.json()["status"] == "APPROVED"

    again = await client.patch(
        f"/api/v1/bookings/{booking_id}",
        params={"approved": "true"},
        headers=headers(owner),
    )
    assert again.status_code == 409
    assert "already approved" in again.json()["error"]


@pytest.mark.asyncio
async def test_naive_timestamps_are_read_as_utc(client: AsyncClient, clock, headers, booker, item):
    now = clock.now()
    body = {
        "item_id": item.id,
        "start": (now + HOUR).replace(tzinfo=None).isoformat(),
        "end": (now + DAY).replace(tzinfo=None).isoformat(),
    }

    response = await client.post("/api/v1/bookings", json=body, headers=headers(booker))

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_create_requires_user_header(client: AsyncClient, clock, item):
    now = clock.now()
    response = await client.post("/api/v1/bookings", json=booking_body(item, now + HOUR, now + DAY))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_self_booking_is_conflict(client: AsyncClient, clock, headers, owner, item):
    now = clock.now()
    response = await client.post(
        "/api/v1/bookings",
        json=booking_body(item, now + HOUR, now + DAY),
        headers=headers(owner),
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_unavailable_item_is_conflict(client: AsyncClient, clock, headers, booker, unavailable_item):
    now = clock.now()
    response = await client.post(
        "/api/v1/bookings",
        json=booking_body(unavailable_item, now + HOUR, now + DAY),
        headers=headers(booker),
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_end_before_start_is_bad_request(client: AsyncClient, clock, headers, booker, item):
    now = clock.now()
    response = await client.post(
        "/api/v1/bookings",
        json=booking_body(item, now + DAY, now + HOUR),
        headers=headers(booker),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_item_is_not_found(client: AsyncClient, clock, headers, booker, item):
    now = clock.now()
    body = booking_body(item, now + HOUR, now + DAY)
    body["item_id"] = 999

    response = await client.post("/api/v1/bookings", json=body, headers=headers(booker))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_wrong_owner_is_forbidden(client: AsyncClient, clock, headers, add_booking, booker, item):
    now = clock.now()
    booking = await add_booking(item, booker, now + HOUR, now + DAY)

    response = await client.patch(
        f"/api/v1/bookings/{booking.id}",
        params={"approved": "true"},
        headers=headers(booker),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_booking_masks_foreign_booking(client: AsyncClient, clock, headers, add_booking, booker, stranger, item):
    now = clock.now()
    booking = await add_booking(item, booker, now + HOUR, now + DAY)

    visible = await client.get(f"/api/v1/bookings/{booking.id}", headers=headers(booker))
    hidden = await client.get(f"/api/v1/bookings/{booking.id}", headers=headers(stranger))

    assert visible.status_code == 200
    assert visible.json()["id"] == booking.id
    assert hidden.status_code == 404


@pytest.mark.asyncio
async def test_list_by_booker_with_state(client: AsyncClient, clock, headers, add_booking, booker, item):
    now = clock.now()
    await add_booking(item, booker, now - 2 * DAY, now - DAY)
    future = await add_booking(item, booker, now + DAY, now + 2 * DAY)

    response = await client.get(
        "/api/v1/bookings",
        params={"state": "FUTURE"},
        headers=headers(booker),
    )

    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [future.id]


@pytest.mark.asyncio
async def test_list_by_owner_paged(client: AsyncClient, clock, headers, add_booking, owner, booker, item):
    now = clock.now()
    bookings = [await add_booking(item, booker, now + i * DAY, now + (i + 1) * DAY) for i in range(1, 4)]

    response = await client.get(
        "/api/v1/bookings/owner",
        params={"state": "ALL", "from": 1, "size": 1},
        headers=headers(owner),
    )

    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [bookings[1].id]


@pytest.mark.asyncio
async def test_unknown_state_is_bad_request(client: AsyncClient, headers, booker):
    response = await client.get(
        "/api/v1/bookings",
        params={"state": "BOGUS"},
        headers=headers(booker),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Unknown state: BOGUS"}


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"size": 0}, {"size": 21}, {"from": -1}])
async def test_out_of_range_page_is_rejected(client: AsyncClient, headers, booker, params):
    response = await client.get("/api/v1/bookings", params=params, headers=headers(booker))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_owner_item_listing_has_last_and_next(client: AsyncClient, clock, headers, add_booking, owner, booker, item):
    now = clock.now()
    past = await add_booking(item, booker, now - 2 * DAY, now - DAY, BookingStatus.APPROVED)
    upcoming = await add_booking(item, booker, now + DAY, now + 2 * DAY)

    response = await client.get("/api/v1/items", headers=headers(owner))

    assert response.status_code == 200
    [listed] = response.json()
    assert listed["id"] == item.id
    assert listed["owner_id"] == owner.id
    assert listed["last_booking"]["id"] == past.id
    assert listed["last_booking"]["booker_id"] == booker.id
    assert listed["next_booking"]["id"] == upcoming.id
    assert listed["next_booking"]["status"] == "WAITING"


@pytest.mark.asyncio
async def test_item_detail_for_non_owner(client: AsyncClient, clock, headers, add_booking, booker, item):
    now = clock.now()
    await add_booking(item, booker, now + DAY, now + 2 * DAY)

    response = await client.get(f"/api/v1/items/{item.id}", headers=headers(booker))

    assert response.status_code == 200
    data = response.json()
    assert data["last_booking"] is None
    assert data["next_booking"] is None
    assert data["comments"] == []


@pytest.mark.asyncio
async def test_comment_endpoint(client: AsyncClient, clock, headers, add_booking, booker, item):
    now = clock.now()
    await add_booking(item, booker, now - 2 * DAY, now - DAY)

    response = await client.post(
        f"/api/v1/items/{item.id}/comment",
        json={"text": "  Great drill  "},
        headers=headers(booker),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["text"] == "Great drill"
    assert data["author_name"] == "Boris Booker"

    detail = await client.get(f"/api/v1/items/{item.id}", headers=headers(booker))
    assert [c["id"] for c in detail.json()["comments"]] == [data["id"]]


@pytest.mark.asyncio
async def test_comment_without_finished_booking(client: AsyncClient, clock, headers, add_booking, booker, item):
    now = clock.now()
    await add_booking(item, booker, now + DAY, now + 2 * DAY)

    response = await client.post(
        f"/api/v1/items/{item.id}/comment",
        json={"text": "Looks nice"},
        headers=headers(booker),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_blank_comment_is_rejected(client: AsyncClient, headers, booker, item):
    response = await client.post(
        f"/api/v1/items/{item.id}/comment",
        json={"text": "   "},
        headers=headers(booker),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_health_and_metrics(client: AsyncClient):
    health = await client.get("/health")
    metrics = await client.get("/metrics")

    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert metrics.status_code == 200
    assert "booking_transitions_total" in metrics.text
