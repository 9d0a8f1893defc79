"""Purchase schemas"""
from pydantic import BaseModel
from typing import Optional


class PurchaseCreate(BaseModel):
    """Schema for recording a purchase"""
    note: Optional[str] = None
    funnel_id: Optional[str] = None
    buyer_id: str
    amount: float
    payment_status: str = "pending"
    type: Optional[str] = "stripe"
    stripe_payment_intent_id: Optional[str] = None
    paypal_order_id: Optional[str] = None
    paypal_transaction_id: Optional[str] = None
    provider_fee: float = 0


class PurchaseUpdate(BaseModel):
    """Schema for updating a purchase"""
    note: Optional[str] = None
    amount: Optional[float] = None
    payment_status: Optional[str] = None
    type: Optional[str] = None
    stripe_payment_intent_id: Optional[str] = None
    paypal_order_id: Optional[str] = None
    paypal_transaction_id: Optional[str] = None
    provider_fee: Optional[float] = None


class PurchaseStatusUpdate(BaseModel):
    """Schema for changing the payment status"""
    payment_status: str


class PurchaseFilters(BaseModel):
    """Optional filters for listing purchases"""
    status: Optional[str] = None
    type: Optional[str] = None
    note: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None


class PurchaseStats(BaseModel):
    """Revenue summary over completed purchases"""
    total_revenue: float = 0
    successful_purchases: int = 0
    average_order_value: float = 0
    total_purchases: int = 0
