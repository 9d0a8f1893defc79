"""API dependencies"""
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.responses import Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from breadmade.core.database import RemoteStore
from breadmade.models.user import User
from breadmade.services.admin_service import AdminService
from breadmade.services.auction_service import AuctionService
from breadmade.services.auth_service import AuthService, check_admin_access
from breadmade.services.custom_request_service import CustomRequestService
from breadmade.services.funnel_service import FunnelService
from breadmade.services.lead_service import LeadService
from breadmade.services.leasing_service import LeasingService
from breadmade.services.payment_service import PaymentService
from breadmade.services.purchase_service import PurchaseService
from breadmade.services.strategy_call_service import StrategyCallService
from breadmade.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=500,
            detail=f"{name} not found in app state. Ensure the app was built with create_app().",
        )
    return value


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Bearer token sent by the caller, if any"""
    return credentials.credentials if credentials else None


def get_store(request: Request, access_token: Optional[str] = Depends(get_access_token)) -> RemoteStore:
    """Remote store acting as the caller (the public key for anonymous callers)"""
    store: RemoteStore = _state(request, "store")
    if access_token:
        return store.with_access_token(access_token)
    return store


def get_auth_service(request: Request, store: RemoteStore = Depends(get_store)) -> AuthService:
    return AuthService(_state(request, "auth_client"), store, _state(request, "cache"))


def get_payment_service(request: Request) -> PaymentService:
    return _state(request, "payment_service")


async def get_current_user(
    access_token: Optional[str] = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency to get the caller's user.

    Raises 401 without a bearer token or when the token is not accepted.
    """
    if not access_token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    user = await auth_service.resolve_user(access_token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return user


async def require_admin_user(user: User = Depends(get_current_user)) -> User:
    """Dependency for admin-only routes (403 for non-admins)"""
    if not check_admin_access(user):
        raise HTTPException(status_code=403, detail="Admin privileges required")
    return user


def get_lead_service(store: RemoteStore = Depends(get_store)) -> LeadService:
    return LeadService(store)


def get_booking_service(store: RemoteStore = Depends(get_store)) -> StrategyCallService:
    return StrategyCallService(store)


def get_funnel_service(request: Request, store: RemoteStore = Depends(get_store)) -> FunnelService:
    settings = request.app.state.settings
    return FunnelService(store, settings.FUNNEL_IMAGE_BUCKET, settings.FUNNEL_IMAGE_FOLDER)


def get_auction_service(store: RemoteStore = Depends(get_store)) -> AuctionService:
    return AuctionService(store)


def get_purchase_service(store: RemoteStore = Depends(get_store)) -> PurchaseService:
    return PurchaseService(store)


def get_custom_request_service(store: RemoteStore = Depends(get_store)) -> CustomRequestService:
    return CustomRequestService(store)


def get_leasing_service(store: RemoteStore = Depends(get_store)) -> LeasingService:
    return LeasingService(store)


def get_user_service(store: RemoteStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_admin_service(store: RemoteStore = Depends(get_store)) -> AdminService:
    return AdminService(store)


def csv_response(filename: str, content: str) -> Response:
    """CSV download with an attachment filename"""
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
