"""
Keygate request and response models.

These models define the JSON bodies accepted and returned by the
dashboard routes.
"""

from typing import Literal

from pydantic import BaseModel, Field


class LoginPayload(BaseModel):
    """Request to exchange an API key for a bearer token."""

    api_key: str = Field(..., description="Dashboard API key")


class AuthBody(BaseModel):
    """Issued bearer token."""

    access_token: str = Field(..., description="Signed bearer token")
    token_type: Literal["Bearer"] = Field(default="Bearer", description="Token type label")


class SessionInfo(BaseModel):
    """Claims of the token presented on a protected route."""

    exp: int = Field(..., description="Token expiry as a unix timestamp")


class ErrorResponse(BaseModel):
    """Error body returned for rejected requests."""

    detail: str
