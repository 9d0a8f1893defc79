"""Lead schemas"""
from pydantic import BaseModel, Field
from typing import Optional


class LeadBase(BaseModel):
    """Base lead schema"""
    email: Optional[str] = None
    phone_number: Optional[str] = None
    username: Optional[str] = None


class LeadCreate(LeadBase):
    """Schema for capturing a lead"""
    email: str = Field(..., description="Contact email")


class LeadUpdate(LeadBase):
    """Schema for updating a lead"""
    pass
