"""
Storage Module - Black Box Interface

Purpose: Abstract credential persistence
Interface: fetch_credential(), list_users(), connect(), disconnect()
Hidden: Redis specifics, PostgREST query format, connection handling

Can be replaced with any storage backend without affecting other modules.
"""

import logging
from typing import Optional

import redis.asyncio as redis

from .credentials import PostgrestCredentialStore, RedisCredentialStore, StorageError

logger = logging.getLogger(__name__)


class StorageModule:
    """Black box Redis connection owner."""

    def __init__(self, connection_url: str = "redis://localhost:6379/0"):
        """Initialize storage with connection URL."""
        self.url = connection_url
        self._client: Optional[redis.Redis] = None

    async def connect(self) -> redis.Redis:
        """Get storage connection."""
        if not self._client:
            self._client = redis.from_url(self.url, decode_responses=True)
            logger.info("Redis client created")
        return self._client

    async def disconnect(self):
        """Close storage connection."""
        if self._client:
            await self._client.aclose()
            self._client = None


__all__ = ["StorageModule", "RedisCredentialStore", "PostgrestCredentialStore", "StorageError"]
