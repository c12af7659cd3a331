"""Salted SHA-512 credential verification."""

import base64
import hashlib
import secrets

from .errors import AuthenticationError, AuthFailure


def hash_secret(secret: str, salt: str) -> str:
    """
    Compute the stored form of a secret.

    The secret and salt are concatenated (secret first), hashed with SHA-512
    and encoded with padded standard base64.

    Example:
        >>> hash_secret("s3cr3t", "abc") == hash_secret("s3cr3t", "abc")
        True
    """
    digest = hashlib.sha512(f"{secret}{salt}".encode("utf-8")).digest()
    return base64.standard_b64encode(digest).decode("ascii")


def generate_salt(nbytes: int = 16) -> str:
    """Generate a random URL-safe salt for seeding a credential record."""
    return secrets.token_urlsafe(nbytes)


class CredentialVerifier:
    """Checks a candidate secret against a stored (hash, salt) pair."""

    def verify(self, stored_hash: str, stored_salt: str, candidate_secret: str) -> None:
        """
        Verify a candidate secret.

        Args:
            stored_hash: Base64 SHA-512 digest from the credential store
            stored_salt: Salt stored alongside the hash
            candidate_secret: Secret supplied by the caller

        Raises:
            AuthenticationError: If the digest does not match
        """
        candidate_hash = hash_secret(candidate_secret, stored_salt)

        # Use constant-time comparison for security
        if not secrets.compare_digest(
            candidate_hash.encode("ascii"), stored_hash.encode("utf-8")
        ):
            raise AuthenticationError(AuthFailure.HASH_MISMATCH)
