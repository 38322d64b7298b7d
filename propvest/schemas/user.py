# propvest/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from .base import CamelModel

ROLES = ("user", "admin")


class UserCreate(CamelModel):
    username: str
    password: str
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None

    @field_validator("username")
    @classmethod
    def username_required(cls, v):
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v

    @field_validator("password")
    @classmethod
    def password_strength(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class UserLogin(CamelModel):
    username: str
    password: str


class UserProfileUpdate(CamelModel):
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None


class AdminUserUpdate(UserProfileUpdate):
    role: Optional[str] = None
    is_verified: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def known_role(cls, v):
        if v is not None and v not in ROLES:
            raise ValueError(f"Role must be one of: {', '.join(ROLES)}")
        return v


class UserResponse(CamelModel):
    id: int
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None
    wallet_balance: float
    role: str
    is_verified: bool
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
