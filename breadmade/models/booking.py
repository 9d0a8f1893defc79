"""Strategy call booking model"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel


class StrategyCallBooking(BaseModel):
    """Consultation slot requested by a user or prospect"""
    id: str
    user_id: Optional[str] = None
    email: str
    phone_number: Optional[str] = None
    name: str
    company: Optional[str] = None
    preferred_date: date
    preferred_time_slot: str
    timezone: str = "UTC"
    created_at: datetime
    updated_at: datetime

    def __repr__(self):
        return f"<StrategyCallBooking {self.email} {self.preferred_date} {self.preferred_time_slot}>"
