"""Authentication errors.

Every failure surfaces to callers as a single ``AuthenticationError``.
The ``reason`` attribute is for logs and the audit trail only.
"""

from enum import Enum


class AuthFailure(str, Enum):
    """Internal reason an authentication attempt failed."""

    MISSING_HEADER = "missing_header"
    MALFORMED_HEADER = "malformed_header"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    STORE_UNAVAILABLE = "store_unavailable"
    INVALID_RECORD = "invalid_record"
    HASH_MISMATCH = "hash_mismatch"
    SIGNING_FAILED = "signing_failed"


class AuthenticationError(Exception):
    """Authentication failed. The public message never says why."""

    public_message = "Authentication failed"

    def __init__(self, reason: AuthFailure):
        super().__init__(self.public_message)
        self.reason = reason

    def __repr__(self) -> str:
        return f"AuthenticationError(reason={self.reason.value!r})"
