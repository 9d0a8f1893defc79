"""Pydantic schemas for request/response validation"""
from breadmade.schemas.auth import LoginRequest, SignupRequest, AuthResponse
from breadmade.schemas.lead import LeadCreate, LeadUpdate
from breadmade.schemas.booking import BookingCreate, BookingUpdate
from breadmade.schemas.funnel import FunnelCreate, FunnelUpdate, CategoryCreate
from breadmade.schemas.auction import (
    AuctionCreate,
    AuctionUpdate,
    BidCreate,
    BidUpdate,
    BidPlace,
    BidResponse,
    CountdownSnapshot,
)
from breadmade.schemas.purchase import (
    PurchaseCreate,
    PurchaseUpdate,
    PurchaseStatusUpdate,
    PurchaseFilters,
    PurchaseStats,
)
from breadmade.schemas.request import (
    CustomRequestCreate,
    LeaseRequestCreate,
    LeaseDraftCreate,
    LeaseRequestUpdate,
    StatusUpdate,
    RevenueUpdate,
)
from breadmade.schemas.payment import (
    SetupIntentRequest,
    SavePaymentMethodRequest,
    PaymentIntentRequest,
    PaymentResponse,
)
from breadmade.schemas.admin import AdminStats, RoleUpdate, ProfileUpdate

__all__ = [
    "LoginRequest",
    "SignupRequest",
    "AuthResponse",
    "LeadCreate",
    "LeadUpdate",
    "BookingCreate",
    "BookingUpdate",
    "FunnelCreate",
    "FunnelUpdate",
    "CategoryCreate",
    "AuctionCreate",
    "AuctionUpdate",
    "BidCreate",
    "BidUpdate",
    "BidPlace",
    "BidResponse",
    "CountdownSnapshot",
    "PurchaseCreate",
    "PurchaseUpdate",
    "PurchaseStatusUpdate",
    "PurchaseFilters",
    "PurchaseStats",
    "CustomRequestCreate",
    "LeaseRequestCreate",
    "LeaseDraftCreate",
    "LeaseRequestUpdate",
    "StatusUpdate",
    "RevenueUpdate",
    "SetupIntentRequest",
    "SavePaymentMethodRequest",
    "PaymentIntentRequest",
    "PaymentResponse",
    "AdminStats",
    "RoleUpdate",
    "ProfileUpdate",
]
