"""Unit tests for strategy call booking service"""
from datetime import date

import pytest

from breadmade.core.exceptions import ServiceError
from breadmade.schemas.booking import BookingCreate, BookingUpdate
from breadmade.services.strategy_call_service import StrategyCallService
from tests.helpers import make_row, request_json

BOOKINGS = "/rest/v1/strategy_call_bookings"


def booking_row(**fields):
    row = {
        "id": "booking-1",
        "user_id": "user-1",
        "email": "jane@example.com",
        "name": "Jane",
        "preferred_date": "2025-09-10",
        "preferred_time_slot": "10:00 AM",
        "timezone": "UTC",
    }
    row.update(fields)
    return make_row(**row)


@pytest.mark.asyncio
async def test_create_booking_defaults_timezone_to_utc(store, backend):
    """Test bookings without a timezone are stored as UTC"""
    backend.add("POST", BOOKINGS, booking_row(), status_code=201)

    booking = await StrategyCallService(store).create_booking(BookingCreate(
        email="jane@example.com",
        name="Jane",
        preferred_date=date(2025, 9, 10),
        preferred_time_slot="10:00 AM",
    ))

    assert booking.preferred_date == date(2025, 9, 10)
    body = request_json(backend.last("POST", BOOKINGS))[0]
    assert body["timezone"] == "UTC"
    assert body["preferred_date"] == "2025-09-10"
    assert body["phone_number"] is None


@pytest.mark.asyncio
async def test_create_booking_failure_raises(store, backend):
    """Test a failed insert raises with the remote message"""
    backend.fail("POST", BOOKINGS, "null value in column \"email\"")

    with pytest.raises(ServiceError, match="Failed to create booking: null value"):
        await StrategyCallService(store).create_booking(BookingCreate(
            email="jane@example.com",
            name="Jane",
            preferred_date=date(2025, 9, 10),
            preferred_time_slot="10:00 AM",
        ))


@pytest.mark.asyncio
async def test_get_user_bookings_filters_by_user(store, backend):
    """Test user bookings are filtered by user id"""
    backend.add("GET", BOOKINGS, [booking_row()])

    bookings = await StrategyCallService(store).get_user_bookings("user-1")

    assert len(bookings) == 1
    assert backend.last("GET", BOOKINGS).url.params["user_id"] == "eq.user-1"


@pytest.mark.asyncio
async def test_get_all_bookings_empty_on_failure(store, backend):
    """Test failed reads return an empty list"""
    backend.fail("GET", BOOKINGS)

    assert await StrategyCallService(store).get_all_bookings() == []


@pytest.mark.asyncio
async def test_update_booking(store, backend):
    """Test updates send changed fields with updated_at"""
    backend.add("PATCH", BOOKINGS, booking_row(preferred_time_slot="2:00 PM"))

    booking = await StrategyCallService(store).update_booking(
        "booking-1", BookingUpdate(preferred_time_slot="2:00 PM")
    )

    assert booking.preferred_time_slot == "2:00 PM"
    body = request_json(backend.last("PATCH", BOOKINGS))
    assert set(body) == {"preferred_time_slot", "updated_at"}


@pytest.mark.asyncio
async def test_delete_booking_failure_raises(store, backend):
    """Test a failed delete raises ServiceError"""
    backend.fail("DELETE", BOOKINGS, "not allowed")

    with pytest.raises(ServiceError, match="not allowed"):
        await StrategyCallService(store).delete_booking("booking-1")


@pytest.mark.asyncio
async def test_has_existing_bookings(store, backend):
    """Test the existence check looks for a single row"""
    service = StrategyCallService(store)

    backend.add("GET", BOOKINGS, [{"id": "booking-1"}])
    assert await service.has_existing_bookings("user-1") is True
    assert backend.last("GET", BOOKINGS).url.params["limit"] == "1"

    backend.add("GET", BOOKINGS, [])
    assert await service.has_existing_bookings("user-1") is False

    backend.fail("GET", BOOKINGS)
    assert await service.has_existing_bookings("user-1") is False
