"""Payment function payloads and the response envelope"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class SetupIntentRequest(BaseModel):
    """Store a card for a later charge on an auction"""
    auction_id: str = Field(..., alias="auctionId")
    buyer_id: str = Field(..., alias="buyerId")

    class Config:
        populate_by_name = True


class SavePaymentMethodRequest(BaseModel):
    """Persist a confirmed payment method"""
    user_id: str = Field(..., alias="userId")
    stripe_payment_method_id: str = Field(..., alias="stripePaymentMethodId")
    brand: str
    last4: str
    exp_month: int = Field(..., alias="expMonth")
    exp_year: int = Field(..., alias="expYear")

    class Config:
        populate_by_name = True


class PaymentIntentRequest(BaseModel):
    """Charge a stored payment method"""
    amount: float
    currency: str = "usd"
    auction_id: str = Field(..., alias="auctionId")
    buyer_id: str = Field(..., alias="buyerId")
    payment_method_id: str = Field(..., alias="paymentMethodId")

    class Config:
        populate_by_name = True


class PaymentResponse(BaseModel):
    """Uniform envelope returned by every payment operation"""
    success: bool = False
    error: Optional[str] = None
    setup_intent: Optional[Dict[str, Any]] = Field(None, alias="setupIntent")
    payment_method: Optional[Dict[str, Any]] = Field(None, alias="paymentMethod")
    payment_intent: Optional[Dict[str, Any]] = Field(None, alias="paymentIntent")

    class Config:
        populate_by_name = True
