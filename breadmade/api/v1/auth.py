"""Auth API endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from breadmade.api.deps import get_access_token, get_auth_service, get_current_user
from breadmade.models.user import User
from breadmade.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from breadmade.services.auth_service import AuthService

router = APIRouter()


def _failure(status_code: int, response: AuthResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


@router.post("/auth/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Sign in with email and password

    The returned ``access_token`` is sent back as ``Authorization: Bearer``.
    Failures answer 401 with ``success: false`` and the provider's message.
    """
    response = await auth_service.login(credentials.email, credentials.password, persist=False)
    if not response.success:
        return _failure(401, response)
    return response


@router.post("/auth/signup", response_model=AuthResponse, status_code=201)
async def signup(
    data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new account

    - **email**: Account email
    - **password**: Account password
    - **name**: Display name stored on the profile
    """
    response = await auth_service.signup(data.email, data.password, data.name, persist=False)
    if not response.success:
        return _failure(400, response)
    return response


@router.post("/auth/logout")
async def logout(
    access_token: Optional[str] = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Revoke the caller's session"""
    if access_token:
        await auth_service.logout(access_token)
    return {"success": True}


@router.get("/auth/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
    """Currently signed-in user"""
    return user
