"""Auction and bid models"""
import enum
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from breadmade.models.funnel import Funnel


class AuctionStatus(str, enum.Enum):
    """Auction status enumeration"""
    DRAFT = "draft"
    UPCOMING = "upcoming"
    ACTIVE = "active"
    ENDED = "ended"
    SOLD = "sold"


class BidStatus(str, enum.Enum):
    """Bid status enumeration"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    PENDING_OFFER = "pending_offer"
    EXPIRED = "expired"


class BidderProfile(BaseModel):
    """Public part of a bidder's profile"""
    id: str
    display_name: Optional[str] = None


class Bid(BaseModel):
    """Bid or custom offer on an auction"""
    id: str
    auction_id: str
    bidder_id: str
    amount: float = 0
    offer_amount: Optional[float] = None
    status: BidStatus = BidStatus.PENDING
    setup_intent_id: Optional[str] = None
    payment_method_id: Optional[str] = None
    payment_intent_id: Optional[str] = None
    created_at: datetime
    bidder: Optional[BidderProfile] = None


class Auction(BaseModel):
    """Auction of a funnel"""
    id: str
    funnel_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    status: AuctionStatus
    starting_price: float
    reserve_price: Optional[float] = None
    current_price: Optional[float] = None
    buy_now: Optional[float] = None
    winning_bid_id: Optional[str] = None
    winner_id: Optional[str] = None
    starts_at: datetime
    ends_at: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None

    funnel: Optional[Funnel] = None
    winning_bid: Optional[Bid] = None
    bids: List[Bid] = Field(default_factory=list)

    def __repr__(self):
        return f"<Auction {self.id} {self.status.value}>"
