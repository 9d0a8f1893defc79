"""Purchase models"""
import enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class PaymentStatus(str, enum.Enum):
    """Payment status enumeration"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class Purchase(BaseModel):
    """Record of a successful payment"""
    id: str
    note: Optional[str] = None
    funnel_id: Optional[str] = None
    buyer_id: str
    amount: float
    payment_status: str
    type: Optional[str] = None
    stripe_payment_intent_id: Optional[str] = None
    paypal_order_id: Optional[str] = None
    paypal_transaction_id: Optional[str] = None
    provider_fee: float = 0
    created_at: datetime
    updated_at: datetime


class PurchaseWithDetails(Purchase):
    """Purchase enriched with the funnel title and buyer name"""
    funnel_title: Optional[str] = None
    buyer_name: Optional[str] = None
    buyer_email: Optional[str] = None
