"""Custom request and lease request models"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class CustomRequest(BaseModel):
    """Custom funnel build request"""
    id: str
    name: str
    email: str
    company: Optional[str] = None
    phone: Optional[str] = None
    projecttype: str
    industry: str
    targetaudience: Optional[str] = None
    primarygoal: str
    pages: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    timeline: Optional[str] = None
    budget: Optional[str] = None
    inspiration: Optional[str] = None
    additionalnotes: Optional[str] = None
    preferredcontact: Optional[str] = None
    submitted_at: Optional[datetime] = None
    status: str = "pending"
    assigned_team_member: Optional[str] = None
    quarter: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class LeaseRequest(BaseModel):
    """Funnel lease request"""
    id: str
    name: str
    email: str
    company: Optional[str] = None
    phone: Optional[str] = None
    project_type: str
    industry: str
    target_audience: Optional[str] = None
    primary_goal: str
    pages: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    integrations: List[str] = Field(default_factory=list)
    inspiration: Optional[str] = None
    additional_notes: Optional[str] = None
    preferred_contact: str = "email"
    lease_type: str = "performance_based"
    estimated_revenue: Optional[float] = None
    status: str = "pending"
    assigned_team_member: Optional[str] = None
    quarter: Optional[str] = None
    submitted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
