"""Funnel and category models"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Category(BaseModel):
    """Funnel/auction category"""
    id: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Funnel(BaseModel):
    """Admin-curated marketing page tied to a product listing"""
    id: str
    funnel_id: str
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[Category] = None
    is_available_for_lease: bool = False
    active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None

    def __repr__(self):
        return f"<Funnel {self.funnel_id}>"
