"""User and authentication schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Payload for creating an account."""

    name: str = Field(..., max_length=100)
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., max_length=256)


class LoginRequest(BaseModel):
    """Payload for exchanging credentials for a token."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """Bearer token returned after registration or login."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Public user information."""

    id: int
    name: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
