"""
Credential store backends.

Every lookup failure (missing row, unreachable store, unreadable record) is
raised as AuthenticationError so callers cannot tell them apart.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx
import redis.asyncio as redis

from ..auth.errors import AuthenticationError, AuthFailure
from ..auth.interfaces import StoredCredential

logger = logging.getLogger(__name__)

USERS_KEY = "dashboard:users"


class StorageError(Exception):
    """Raised when a non-credential read from the store fails."""


def _credential_from_record(record: Any) -> StoredCredential:
    if not isinstance(record, dict):
        raise AuthenticationError(AuthFailure.INVALID_RECORD)

    fields = {}
    for name in ("hash", "salt"):
        value = record.get(name)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if not isinstance(value, str):
            raise AuthenticationError(AuthFailure.INVALID_RECORD)
        fields[name] = value

    return StoredCredential(hash=fields["hash"], salt=fields["salt"])


class RedisCredentialStore:
    """
    Credential store backed by Redis hashes.

    Layout:
        auth:<account_id>  -> hash with fields "hash" and "salt"
        dashboard:users    -> list of JSON-encoded user rows
    """

    def __init__(self, redis_client):
        """
        Initialize store.

        Args:
            redis_client: Async Redis client
        """
        self.redis = redis_client

    async def fetch_credential(self, account_id: str) -> StoredCredential:
        try:
            record = await self.redis.hgetall(f"auth:{account_id}")
        except redis.RedisError as e:
            logger.error(f"Redis credential lookup failed: {e}")
            raise AuthenticationError(AuthFailure.STORE_UNAVAILABLE) from e

        if not record:
            raise AuthenticationError(AuthFailure.CREDENTIAL_NOT_FOUND)

        record = {
            (k.decode("utf-8") if isinstance(k, bytes) else k): v for k, v in record.items()
        }
        return _credential_from_record(record)

    async def store_credential(self, account_id: str, credential: StoredCredential) -> None:
        """Write a credential record. Used to seed a fresh deployment."""
        await self.redis.hset(
            f"auth:{account_id}", mapping={"hash": credential.hash, "salt": credential.salt}
        )

    async def list_users(self) -> List[Dict[str, Any]]:
        try:
            rows = await self.redis.lrange(USERS_KEY, 0, -1)
        except redis.RedisError as e:
            logger.error(f"Redis user listing failed: {e}")
            raise StorageError("Failed to read dashboard users") from e

        users = []
        for row in rows:
            try:
                users.append(json.loads(row))
            except (TypeError, ValueError):
                # Skip corrupt rows rather than failing the whole listing
                logger.warning(f"Skipping unreadable row in {USERS_KEY}")
        return users


class PostgrestCredentialStore:
    """
    Credential store backed by a PostgREST (Supabase) table.

    The credential row is selected with ``id=eq.<account_id>`` and the
    single-object media type, so zero or several matching rows are rejected
    by the server.
    """

    SINGLE_OBJECT = "application/vnd.pgrst.object+json"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        table: str = "auth",
        api_key: Optional[str] = None,
    ):
        """
        Initialize store with an injected HTTP client.

        Args:
            http_client: Shared async HTTP client
            base_url: PostgREST base URL (without /rest/v1)
            table: Credential table name
            api_key: Service key sent as apikey and bearer token
        """
        self.http = http_client
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.headers: Dict[str, str] = {}
        if api_key:
            self.headers = {"apikey": api_key, "Authorization": f"Bearer {api_key}"}

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    async def fetch_credential(self, account_id: str) -> StoredCredential:
        try:
            response = await self.http.get(
                self._url(self.table),
                params={"id": f"eq.{account_id}", "select": "*"},
                headers={**self.headers, "Accept": self.SINGLE_OBJECT},
            )
        except httpx.HTTPError as e:
            logger.error(f"PostgREST credential lookup failed: {e}")
            raise AuthenticationError(AuthFailure.STORE_UNAVAILABLE) from e

        # PostgREST answers 406 when the single-object query matches 0 or >1 rows
        if response.status_code in (404, 406):
            raise AuthenticationError(AuthFailure.CREDENTIAL_NOT_FOUND)
        if response.is_error:
            logger.error(f"PostgREST credential lookup returned {response.status_code}")
            raise AuthenticationError(AuthFailure.STORE_UNAVAILABLE)

        try:
            record = response.json()
        except ValueError:
            raise AuthenticationError(AuthFailure.INVALID_RECORD) from None

        return _credential_from_record(record)

    async def list_users(self) -> List[Dict[str, Any]]:
        try:
            response = await self.http.get(
                self._url("users"), params={"select": "*"}, headers=self.headers
            )
            response.raise_for_status()
            rows = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"PostgREST user listing failed: {e}")
            raise StorageError("Failed to read dashboard users") from e

        if not isinstance(rows, list):
            raise StorageError("Unexpected users payload")
        return rows
