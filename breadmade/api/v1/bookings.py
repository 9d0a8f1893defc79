"""Strategy call booking API endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from breadmade.api.deps import (
    csv_response,
    get_booking_service,
    get_current_user,
    require_admin_user,
)
from breadmade.models.booking import StrategyCallBooking
from breadmade.models.user import User
from breadmade.schemas.booking import BookingCreate, BookingUpdate
from breadmade.services.strategy_call_service import StrategyCallService
from breadmade.utils.export import bookings_filename, bookings_to_csv

router = APIRouter()


@router.post("/bookings", response_model=StrategyCallBooking, status_code=201)
async def create_booking(
    booking_data: BookingCreate,
    service: StrategyCallService = Depends(get_booking_service),
):
    """
    Request a strategy call

    - **email** / **name**: Contact details
    - **preferred_date** / **preferred_time_slot**: Requested slot
    - **timezone**: Defaults to UTC
    """
    return await service.create_booking(booking_data)


@router.get("/bookings/me", response_model=List[StrategyCallBooking])
async def my_bookings(
    user: User = Depends(get_current_user),
    service: StrategyCallService = Depends(get_booking_service),
):
    return await service.get_user_bookings(user.id)


@router.get("/bookings", response_model=List[StrategyCallBooking], dependencies=[Depends(require_admin_user)])
async def list_bookings(service: StrategyCallService = Depends(get_booking_service)):
    return await service.get_all_bookings()


@router.get("/bookings/export", dependencies=[Depends(require_admin_user)])
async def export_bookings(service: StrategyCallService = Depends(get_booking_service)):
    bookings = await service.get_all_bookings()
    return csv_response(bookings_filename(), bookings_to_csv(bookings))


@router.get("/bookings/{booking_id}", response_model=StrategyCallBooking, dependencies=[Depends(require_admin_user)])
async def get_booking(booking_id: str, service: StrategyCallService = Depends(get_booking_service)):
    booking = await service.get_booking_by_id(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.patch("/bookings/{booking_id}", response_model=StrategyCallBooking, dependencies=[Depends(require_admin_user)])
async def update_booking(
    booking_id: str,
    updates: BookingUpdate,
    service: StrategyCallService = Depends(get_booking_service),
):
    return await service.update_booking(booking_id, updates)


@router.delete("/bookings/{booking_id}", status_code=204, dependencies=[Depends(require_admin_user)])
async def delete_booking(booking_id: str, service: StrategyCallService = Depends(get_booking_service)):
    await service.delete_booking(booking_id)
