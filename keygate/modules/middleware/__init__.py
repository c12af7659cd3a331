"""
Authentication Middleware Module - Black Box Interface

Purpose: Guard protected FastAPI routes with a bearer token
Interface: require_claims dependency, auth_error_handler
Hidden: Header parsing, token validation, error formatting

Any route that depends on require_claims is rejected before its body runs
when the Authorization header is missing, malformed or carries a bad token.
"""

import logging

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ..auth.errors import AuthenticationError
from ..auth.tokens import Claims

logger = logging.getLogger(__name__)


async def require_claims(request: Request) -> Claims:
    """
    Validate the bearer token on the request and return its claims.

    The claims are also stored on ``request.state.claims`` for downstream use.

    Raises:
        AuthenticationError: If the header or token is rejected
        HTTPException: 503 if the auth service has not been initialized
    """
    auth_service = getattr(request.app.state, "auth_service", None)
    if auth_service is None:
        raise HTTPException(503, "Service not initialized")

    claims = auth_service.authenticate(request.headers.get("Authorization"))
    request.state.claims = claims
    return claims


async def auth_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Map every authentication failure to the same 401 response."""
    logger.warning(
        f"Authentication failed for {request.method} {request.url.path}: {exc.reason.value}"
    )
    return JSONResponse(
        status_code=401,
        content={"detail": AuthenticationError.public_message},
        headers={"WWW-Authenticate": "Bearer"},
    )


__all__ = ["require_claims", "auth_error_handler"]
