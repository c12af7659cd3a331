"""
Authentication Module - Black Box Interface

Purpose: Verify the dashboard API key and issue/validate bearer tokens
Interface: DashboardAuthService.login(), DashboardAuthService.authenticate()
Hidden: Hash format, signing algorithm, key material

Every failure is raised as AuthenticationError; the reason stays internal.
"""

from .errors import AuthenticationError, AuthFailure
from .interfaces import CredentialStore, StoredCredential
from .tokens import Claims, SigningKeys, TokenIssuer
from .verifier import CredentialVerifier, generate_salt, hash_secret

__all__ = [
    "AuthenticationError",
    "AuthFailure",
    "Claims",
    "CredentialStore",
    "CredentialVerifier",
    "SigningKeys",
    "StoredCredential",
    "TokenIssuer",
    "generate_salt",
    "hash_secret",
]
