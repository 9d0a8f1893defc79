"""User and profile models"""
import enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator


class UserRole(str, enum.Enum):
    """User role enumeration"""
    ADMIN = "admin"
    USER = "user"


def normalize_role(value: Optional[str]) -> UserRole:
    """Map a remote role string to a known role; anything unknown is a regular user"""
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(str(value).lower())
    except ValueError:
        return UserRole.USER


class Profile(BaseModel):
    """Row of the ``profiles`` table, keyed by the auth user id"""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    role: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class User(BaseModel):
    """Normalized signed-in identity"""
    id: str
    email: str
    name: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: datetime
    updated_at: datetime

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value):
        return normalize_role(value)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User {self.email} ({self.role.value})>"
