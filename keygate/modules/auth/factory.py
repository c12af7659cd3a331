"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the service facade (hiding implementation)
"""

import logging
from typing import Any, Optional

import httpx

from ...config.provider import ConfigProvider
from ..storage.credentials import PostgrestCredentialStore, RedisCredentialStore
from .service import DashboardAuthService
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Reads configuration once
    - Creates the signing keys, store and verifier
    - Returns only the public facade
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        redis_client: Optional[Any] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> DashboardAuthService:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider
            redis_client: Async Redis client (store backend and audit trail)
            http_client: Async HTTP client for the PostgREST backend

        Returns:
            DashboardAuthService facade

        Raises:
            ConfigurationError: If the signing secret is missing or the store
                configuration is invalid
            ValueError: If the selected backend's client was not supplied
        """
        # Fail fast on a missing secret before anything else is wired
        signing_config = config_provider.get_signing_config()
        store_config = config_provider.get_store_config()

        issuer = TokenIssuer.from_config(signing_config)

        if store_config.backend == "postgrest":
            if http_client is None:
                raise ValueError("PostgREST credential store requires an HTTP client")
            logger.info("Building authentication stack with PostgREST credential store")
            store = PostgrestCredentialStore(
                http_client,
                base_url=store_config.postgrest_url,
                table=store_config.postgrest_table,
                api_key=store_config.postgrest_api_key,
            )
        else:
            if redis_client is None:
                raise ValueError("Redis credential store requires a Redis client")
            logger.info("Building authentication stack with Redis credential store")
            store = RedisCredentialStore(redis_client)

        return DashboardAuthService(
            store=store,
            issuer=issuer,
            account_id=store_config.account_id,
            redis_client=redis_client,
        )
