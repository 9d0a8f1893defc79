"""Strategy call booking schemas"""
from datetime import date
from pydantic import BaseModel, Field
from typing import Optional


class BookingBase(BaseModel):
    """Base booking schema"""
    user_id: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None
    preferred_date: Optional[date] = None
    preferred_time_slot: Optional[str] = None
    timezone: Optional[str] = None


class BookingCreate(BookingBase):
    """Schema for requesting a strategy call"""
    email: str = Field(..., description="Contact email")
    name: str = Field(..., description="Contact name")
    preferred_date: date = Field(..., description="Preferred call date")
    preferred_time_slot: str = Field(..., description="Preferred time slot label")


class BookingUpdate(BookingBase):
    """Schema for updating a booking"""
    pass
