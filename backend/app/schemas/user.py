"""User schemas"""
from typing import Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: str
    password: str


class SignupRequest(CamelModel):
    """Schema for registering a demo user"""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    role: Literal["farmer", "agronomist"] = "farmer"
    name: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = None
    land_size: float = Field(0, ge=0, description="Land size in acres")


class UserResponse(CamelModel):
    """User without password"""

    id: int
    email: str
    role: str
    name: str
    location: Optional[str] = None
    land_size: float = 0


class AuthResponse(CamelModel):
    success: bool
    user: Optional[UserResponse] = None
    message: Optional[str] = None
