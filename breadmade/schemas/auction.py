"""Auction and bid schemas"""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional
from breadmade.models.auction import Auction, AuctionStatus, Bid, BidStatus


class AuctionBase(BaseModel):
    """Base auction schema"""
    funnel_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    status: Optional[AuctionStatus] = None
    starting_price: Optional[float] = None
    reserve_price: Optional[float] = None
    current_price: Optional[float] = None
    buy_now: Optional[float] = None
    winning_bid_id: Optional[str] = None
    winner_id: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None


class AuctionCreate(AuctionBase):
    """Schema for creating an auction"""
    status: AuctionStatus = AuctionStatus.DRAFT
    starting_price: float = Field(..., description="Opening price")
    starts_at: datetime = Field(..., description="Auction start")
    ends_at: datetime = Field(..., description="Auction end")


class AuctionUpdate(AuctionBase):
    """Schema for updating an auction"""
    pass


class BidCreate(BaseModel):
    """Schema for placing a bid or offer"""
    auction_id: str
    bidder_id: str
    amount: float
    offer_amount: Optional[float] = None
    status: BidStatus = BidStatus.PENDING
    setup_intent_id: Optional[str] = None
    payment_method_id: Optional[str] = None
    payment_intent_id: Optional[str] = None


class BidUpdate(BaseModel):
    """Schema for updating a bid"""
    amount: Optional[float] = None
    offer_amount: Optional[float] = None
    status: Optional[BidStatus] = None
    setup_intent_id: Optional[str] = None
    payment_method_id: Optional[str] = None
    payment_intent_id: Optional[str] = None


class BidPlace(BaseModel):
    """Bid placed by the signed-in user on the auction in the path"""
    amount: float
    offer_amount: Optional[float] = None
    setup_intent_id: Optional[str] = None
    payment_method_id: Optional[str] = None


class BidResponse(BaseModel):
    """Outcome of placing a bid or buying an auction outright; failures never raise"""
    success: bool
    bid: Optional[Bid] = None
    auction: Optional[Auction] = None
    error: Optional[str] = None


class CountdownSnapshot(BaseModel):
    """Time left on an auction, as sent to countdown clients"""
    auction_id: str
    ends_at: datetime
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    expired: bool = False
    display: str
