"""Funnel schemas"""
from pydantic import BaseModel, Field
from typing import Optional


class FunnelBase(BaseModel):
    """Base funnel schema"""
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[str] = None
    is_available_for_lease: Optional[bool] = None


class FunnelCreate(FunnelBase):
    """Schema for creating a funnel"""
    title: str = Field(..., description="Funnel title")


class FunnelUpdate(FunnelBase):
    """Schema for updating a funnel"""
    active: Optional[bool] = None


class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    name: str = Field(..., description="Category name")
