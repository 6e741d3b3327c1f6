"""Pydantic schemas for admin session endpoints."""

from pydantic import Field

from api.schemas.common import CamelModel, UnstrippedStr


class LoginRequest(CamelModel):
    """Schema for the admin login form."""

    password: UnstrippedStr = Field(..., min_length=1, max_length=256)


class AuthStatusResponse(CamelModel):
    """Schema for the session check."""

    is_authenticated: bool
