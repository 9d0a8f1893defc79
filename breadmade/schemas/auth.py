"""Auth schemas"""
from pydantic import BaseModel, Field
from typing import Optional
from breadmade.models.user import User


class LoginRequest(BaseModel):
    """Schema for password login"""
    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Account password")


class SignupRequest(LoginRequest):
    """Schema for account registration"""
    name: str = Field(..., description="Display name")


class AuthResponse(BaseModel):
    """Outcome of a login/signup call; failures never raise"""
    success: bool
    user: Optional[User] = None
    access_token: Optional[str] = None
    error: Optional[str] = None
