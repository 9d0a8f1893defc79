"""Admin schemas"""
from pydantic import BaseModel
from typing import Optional
from breadmade.models.user import UserRole


class AdminStats(BaseModel):
    """Dashboard counters"""
    total_leads: int = 0
    total_requests: int = 0
    pending_requests: int = 0
    total_revenue: float = 0
    active_auctions: int = 0
    total_purchases: int = 0


class RoleUpdate(BaseModel):
    """Schema for changing a user's role"""
    role: UserRole


class ProfileUpdate(BaseModel):
    """Schema for editing a profile"""
    name: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
