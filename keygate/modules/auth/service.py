"""
Dashboard Authentication Service Facade.

This module provides:
- The login flow (credential lookup, verification, token issuance)
- Bearer header authentication for protected routes
- An optional Redis audit trail of login attempts
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional

from ..api.models import AuthBody
from .errors import AuthenticationError, AuthFailure
from .interfaces import CredentialStore
from .tokens import Claims, TokenIssuer
from .verifier import CredentialVerifier

logger = logging.getLogger(__name__)

AUDIT_KEY = "auth:audit"
AUDIT_MAX_EVENTS = 10000


def parse_bearer(authorization: Optional[str]) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header value.

    Raises:
        AuthenticationError: If the header is missing or not a bearer credential
    """
    if not authorization:
        raise AuthenticationError(AuthFailure.MISSING_HEADER)

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise AuthenticationError(AuthFailure.MALFORMED_HEADER)

    return token


class DashboardAuthService:
    """
    Facade over the dashboard authentication flow.

    Accepts all collaborators via constructor injection and hides how
    credentials are stored, verified and turned into tokens.
    """

    def __init__(
        self,
        store: CredentialStore,
        issuer: TokenIssuer,
        account_id: str = "dashboard",
        verifier: Optional[CredentialVerifier] = None,
        redis_client=None,
    ):
        """
        Initialize with injected dependencies.

        Args:
            store: Credential store holding the (hash, salt) record
            issuer: Token issuer holding the signing keys
            account_id: Identifier of the dashboard credential record
            verifier: Credential verifier (default: CredentialVerifier())
            redis_client: Optional async Redis client for the audit trail
        """
        self.store = store
        self.issuer = issuer
        self.account_id = account_id
        self.verifier = verifier or CredentialVerifier()
        self.redis = redis_client

    async def login(self, api_key: str) -> AuthBody:
        """
        Exchange an API key for a bearer token.

        Args:
            api_key: Candidate secret supplied by the caller

        Returns:
            AuthBody with the signed token

        Raises:
            AuthenticationError: On lookup failure, mismatch or signing failure
        """
        try:
            credential = await self.store.fetch_credential(self.account_id)
            self.verifier.verify(credential.hash, credential.salt, api_key)
            claims = self.issuer.claims_for_login()
            token = self.issuer.issue(claims)
        except AuthenticationError as e:
            logger.warning(f"Dashboard login rejected: {e.reason.value}")
            await self._log_event("login_failed", {"reason": e.reason.value})
            raise

        logger.info("Dashboard login succeeded")
        await self._log_event("login_succeeded", {"exp": claims.exp})
        return AuthBody(access_token=token)

    def authenticate(self, authorization: Optional[str]) -> Claims:
        """
        Validate the bearer token carried by an Authorization header value.

        Returns:
            Claims from the validated token

        Raises:
            AuthenticationError: If the header is missing, malformed or the
                token fails validation
        """
        return self.issuer.validate(parse_bearer(authorization))

    async def list_users(self) -> List[Dict[str, Any]]:
        """
        List dashboard user rows from the credential store.

        Raises:
            StorageError: If the store cannot be read
        """
        return await self.store.list_users()

    async def _log_event(self, event_type: str, data: Dict[str, Any]):
        """Log security event for audit."""
        if not self.redis:
            return

        event = {
            "type": event_type,
            "account_id": self.account_id,
            "data": data,
            "timestamp": datetime.now(UTC).isoformat(),
        }

        # The audit trail must never decide the login outcome
        try:
            await self.redis.lpush(AUDIT_KEY, json.dumps(event))
            await self.redis.ltrim(AUDIT_KEY, 0, AUDIT_MAX_EVENTS - 1)
        except Exception as e:
            logger.warning(f"Failed to write audit event {event_type}: {e}")
