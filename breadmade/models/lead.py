"""Lead models"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class Lead(BaseModel):
    """Captured prospective-customer contact"""
    id: str
    email: str
    phone_number: Optional[str] = None
    username: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    def __repr__(self):
        return f"<Lead {self.email}>"


class LeadSource(BaseModel):
    """Prospect assembled from a custom request or a bid offer"""
    id: str
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    source: str
    created_at: datetime

    # custom_request fields
    project_type: Optional[str] = None
    budget: Optional[str] = None
    status: Optional[str] = None
    industry: Optional[str] = None
    targetaudience: Optional[str] = None
    primarygoal: Optional[str] = None
    pages: Optional[List[str]] = None
    features: Optional[List[str]] = None
    timeline: Optional[str] = None
    inspiration: Optional[str] = None
    additionalnotes: Optional[str] = None
    preferredcontact: Optional[str] = None

    # bid_offer fields
    offer_amount: Optional[float] = None
    auction_id: Optional[str] = None
    bidder_id: Optional[str] = None
