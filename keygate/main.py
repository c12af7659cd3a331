#!/usr/bin/env python3
"""
Keygate - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Serves the dashboard login and protected routes

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import httpx
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request

from keygate.config.provider import ConfigProvider, EnvConfigProvider
from keygate.logging_config import configure_logging, get_logging_config
from keygate.modules.api import AuthBody, ErrorResponse, LoginPayload, SessionInfo
from keygate.modules.auth.errors import AuthenticationError
from keygate.modules.auth.factory import AuthFactory
from keygate.modules.auth.service import DashboardAuthService
from keygate.modules.auth.tokens import Claims
from keygate.modules.middleware import auth_error_handler, require_claims
from keygate.modules.storage import StorageError, StorageModule

logger = logging.getLogger(__name__)

DASHBOARD_PREFIX = "/api/v1/dashboard"


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    auth_service: Optional[DashboardAuthService] = None,
) -> FastAPI:
    """
    Create the Keygate application.

    Args:
        config_provider: Configuration source (default: environment variables)
        auth_service: Pre-built auth service; skips building one at startup

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        if app.state.auth_service is not None:
            yield
            return

        logger.info("Starting Keygate API...")

        # Configuration errors here abort startup
        store_config = config_provider.get_store_config()
        storage: Optional[StorageModule] = None
        http_client: Optional[httpx.AsyncClient] = None
        redis_client = None

        if store_config.backend == "postgrest":
            http_client = httpx.AsyncClient(timeout=10.0)
        else:
            storage = StorageModule(store_config.redis_url)
            redis_client = await storage.connect()

        try:
            app.state.auth_service = AuthFactory.build(
                config_provider, redis_client=redis_client, http_client=http_client
            )
            logger.info("Authentication service initialized via factory")
            logger.info("Keygate API started successfully")

            yield
        finally:
            logger.info("Shutting down Keygate API...")
            app.state.auth_service = None
            if http_client:
                await http_client.aclose()
            if storage:
                await storage.disconnect()
            logger.info("Keygate API shutdown complete")

    app = FastAPI(
        title="Keygate API",
        description="Keygate - Dashboard login and bearer token authorization",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.auth_service = auth_service
    app.add_exception_handler(AuthenticationError, auth_error_handler)

    def get_auth_service(request: Request) -> DashboardAuthService:
        service = request.app.state.auth_service
        if service is None:
            raise HTTPException(503, "Service not initialized")
        return service

    @app.get("/health")
    async def health() -> Dict[str, str]:
        """Liveness probe."""
        return {"status": "healthy"}

    @app.post(
        f"{DASHBOARD_PREFIX}/login",
        response_model=AuthBody,
        responses={401: {"model": ErrorResponse}},
    )
    async def login(
        payload: LoginPayload,
        auth: DashboardAuthService = Depends(get_auth_service),
    ) -> AuthBody:
        """
        Exchange the dashboard API key for a bearer token.

        Returns:
            200: {"access_token": ..., "token_type": "Bearer"}
            401: Authentication failed
        """
        return await auth.login(payload.api_key)

    @app.get(
        f"{DASHBOARD_PREFIX}/session",
        response_model=SessionInfo,
        responses={401: {"model": ErrorResponse}},
    )
    async def session(claims: Claims = Depends(require_claims)) -> SessionInfo:
        """Return the claims of the presented token."""
        return SessionInfo(exp=claims.exp)

    @app.get(f"{DASHBOARD_PREFIX}/users", responses={401: {"model": ErrorResponse}})
    async def list_users(
        claims: Claims = Depends(require_claims),
        auth: DashboardAuthService = Depends(get_auth_service),
    ) -> List[Dict[str, Any]]:
        """
        List dashboard users.

        Returns:
            200: User rows as stored
            401: Authentication failed
            503: Store unavailable
        """
        try:
            return await auth.list_users()
        except StorageError as e:
            logger.error(f"User listing failed: {e}")
            raise HTTPException(503, "Store unavailable")

    return app


app = create_app()


def main():
    """Run the API server."""
    api_config = EnvConfigProvider().get_api_config()
    configure_logging(api_config.log_level)
    uvicorn.run(
        "keygate.main:app",
        host=api_config.host,
        port=api_config.port,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
