"""Custom request and lease request schemas"""
from pydantic import BaseModel, Field
from typing import List, Optional


class CustomRequestCreate(BaseModel):
    """Schema for submitting a custom funnel request"""
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


class LeaseRequestCreate(BaseModel):
    """Schema for submitting a lease request"""
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
    preferred_contact: Optional[str] = None
    lease_type: Optional[str] = None
    estimated_revenue: Optional[float] = None


class LeaseDraftCreate(BaseModel):
    """First step of the lease form: contact details only"""
    name: Optional[str] = None
    email: str
    company: Optional[str] = None
    phone: Optional[str] = None


class LeaseRequestUpdate(BaseModel):
    """Schema for editing a lease request"""
    name: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    project_type: Optional[str] = None
    industry: Optional[str] = None
    target_audience: Optional[str] = None
    primary_goal: Optional[str] = None
    pages: Optional[List[str]] = None
    features: Optional[List[str]] = None
    integrations: Optional[List[str]] = None
    inspiration: Optional[str] = None
    additional_notes: Optional[str] = None
    preferred_contact: Optional[str] = None
    lease_type: Optional[str] = None
    estimated_revenue: Optional[float] = None


class StatusUpdate(BaseModel):
    """Schema for an admin status change"""
    status: str
    assigned_team_member: Optional[str] = None


class RevenueUpdate(BaseModel):
    """Schema for updating estimated revenue"""
    estimated_revenue: float
