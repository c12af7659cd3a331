"""Authentication interfaces following Black Box Design principles."""
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol


@dataclass(frozen=True)
class StoredCredential:
    """Reference digest and the salt used to produce it."""
    hash: str
    salt: str

    def __repr__(self) -> str:
        return "StoredCredential(hash=***, salt=***)"


class CredentialStore(Protocol):
    """Protocol for credential stores - allows swappable backends."""

    async def fetch_credential(self, account_id: str) -> StoredCredential:
        """
        Fetch exactly one credential record.

        Raises:
            AuthenticationError: If the record is missing, unreadable or the
                store cannot be reached
        """
        ...

    async def list_users(self) -> List[Dict[str, Any]]:
        """Return the dashboard user rows as stored."""
        ...
