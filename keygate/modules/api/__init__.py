"""
API Module - Black Box Interface

Purpose: Request and response models for the HTTP surface
Interface: LoginPayload, AuthBody, SessionInfo, ErrorResponse
Hidden: Validation rules, serialization details

The API module only describes data - it contains no business logic.
"""

from .models import AuthBody, ErrorResponse, LoginPayload, SessionInfo

__all__ = ["AuthBody", "ErrorResponse", "LoginPayload", "SessionInfo"]
