"""Domain models parsed from remote rows"""
from breadmade.models.user import User, Profile, UserRole, normalize_role
from breadmade.models.lead import Lead, LeadSource
from breadmade.models.booking import StrategyCallBooking
from breadmade.models.funnel import Funnel, Category
from breadmade.models.auction import Auction, AuctionStatus, Bid, BidStatus, BidderProfile
from breadmade.models.purchase import Purchase, PurchaseWithDetails, PaymentStatus
from breadmade.models.request import CustomRequest, LeaseRequest

__all__ = [
    "User",
    "Profile",
    "UserRole",
    "normalize_role",
    "Lead",
    "LeadSource",
    "StrategyCallBooking",
    "Funnel",
    "Category",
    "Auction",
    "AuctionStatus",
    "Bid",
    "BidStatus",
    "BidderProfile",
    "Purchase",
    "PurchaseWithDetails",
    "PaymentStatus",
    "CustomRequest",
    "LeaseRequest",
]
