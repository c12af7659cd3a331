"""
Signed bearer tokens for the dashboard.

Tokens are stateless HS256 JWTs whose only claim is ``exp``. Nothing is
recorded server-side; validity is decided by signature and expiry alone.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from jwt.utils import base64url_decode, base64url_encode

from ...config.provider import SigningConfig
from .errors import AuthenticationError, AuthFailure

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
MAX_TIMESTAMP = 2**32 - 1


def is_canonical(token: str) -> bool:
    """
    Check that every segment is the exact encoding of its decoded bytes.

    Base64url decoders ignore the unused low bits of a segment's final
    character, so several strings can decode to the same signature.
    """
    try:
        return all(
            base64url_encode(base64url_decode(segment)) == segment.encode("ascii")
            for segment in token.split(".")
        )
    except ValueError:
        return False


@dataclass(frozen=True)
class Claims:
    """Token payload. ``exp`` is a unix timestamp that fits in 32 unsigned bits."""
    exp: int

    def __post_init__(self):
        if isinstance(self.exp, bool) or not isinstance(self.exp, int):
            raise ValueError("exp must be an integer timestamp")
        if not 0 <= self.exp <= MAX_TIMESTAMP:
            raise ValueError(f"exp must be between 0 and {MAX_TIMESTAMP}")

    def to_payload(self) -> Dict[str, Any]:
        return {"exp": self.exp}

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Claims":
        return cls(exp=payload["exp"])


@dataclass(frozen=True)
class SigningKeys:
    """
    Encoding and decoding keys derived from one secret.

    HMAC signing uses the same bytes for both keys. Instances are built once
    at startup and shared read-only.
    """
    encoding_key: bytes
    decoding_key: bytes

    @classmethod
    def from_secret(cls, secret: str) -> "SigningKeys":
        key = secret.encode("utf-8")
        return cls(encoding_key=key, decoding_key=key)

    def __repr__(self) -> str:
        return "SigningKeys(encoding_key=***, decoding_key=***)"


class TokenIssuer:
    """
    Issues and validates dashboard bearer tokens.

    This class is a black box that:
    - Signs claims with the injected encoding key
    - Verifies signature and expiry with the injected decoding key
    - Collapses every failure into AuthenticationError
    """

    def __init__(self, keys: SigningKeys, token_ttl_seconds: int = 3600, leeway_seconds: int = 0):
        """
        Initialize token issuer with injected keys.

        Args:
            keys: Signing key pair
            token_ttl_seconds: Lifetime of tokens minted by claims_for_login
            leeway_seconds: Clock skew tolerated when checking expiry
        """
        self.keys = keys
        self.token_ttl_seconds = token_ttl_seconds
        self.leeway_seconds = leeway_seconds

    @classmethod
    def from_config(cls, config: SigningConfig) -> "TokenIssuer":
        return cls(
            SigningKeys.from_secret(config.secret),
            token_ttl_seconds=config.token_ttl_seconds,
            leeway_seconds=config.leeway_seconds,
        )

    def claims_for_login(self, now: Optional[float] = None) -> Claims:
        """Build the claims for a fresh login, expiring token_ttl_seconds from now."""
        if now is None:
            now = time.time()
        try:
            return Claims(exp=int(now) + self.token_ttl_seconds)
        except ValueError:
            logger.error("Configured token lifetime overflows the expiry timestamp")
            raise AuthenticationError(AuthFailure.SIGNING_FAILED) from None

    def issue(self, claims: Claims) -> str:
        """
        Sign claims into a token string.

        Raises:
            AuthenticationError: If the claims cannot be encoded
        """
        try:
            return jwt.encode(claims.to_payload(), self.keys.encoding_key, algorithm=ALGORITHM)
        except (TypeError, ValueError, jwt.PyJWTError) as e:
            logger.error(f"Failed to sign token: {e}")
            raise AuthenticationError(AuthFailure.SIGNING_FAILED) from e

    def validate(self, token: str) -> Claims:
        """
        Decode a token and verify its signature and expiry.

        Args:
            token: Raw token string (no "Bearer " prefix)

        Returns:
            Claims embedded in the token

        Raises:
            AuthenticationError: On any decode, signature or expiry failure
        """
        if not is_canonical(token):
            logger.debug("Token has a non-canonical segment encoding")
            raise AuthenticationError(AuthFailure.INVALID_TOKEN)

        try:
            payload = jwt.decode(
                token,
                self.keys.decoding_key,
                algorithms=[ALGORITHM],
                leeway=self.leeway_seconds,
                options={"require": ["exp"], "verify_exp": True},
            )
            return Claims.from_payload(payload)
        except jwt.ExpiredSignatureError:
            logger.debug("Token expired")
            raise AuthenticationError(AuthFailure.EXPIRED_TOKEN) from None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            raise AuthenticationError(AuthFailure.INVALID_TOKEN) from None
        except (KeyError, TypeError, ValueError):
            logger.debug("Token carries an out-of-range expiry")
            raise AuthenticationError(AuthFailure.INVALID_TOKEN) from None
