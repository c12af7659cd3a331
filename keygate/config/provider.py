"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol

STORE_BACKENDS = ("redis", "postgrest")


class ConfigurationError(ValueError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class SigningConfig:
    """Token signing configuration."""
    secret: str
    token_ttl_seconds: int = 3600
    leeway_seconds: int = 0

    def __repr__(self) -> str:
        return (
            f"SigningConfig(secret='***', token_ttl_seconds={self.token_ttl_seconds}, "
            f"leeway_seconds={self.leeway_seconds})"
        )


@dataclass
class StoreConfig:
    """Credential store configuration."""
    backend: str
    account_id: str
    redis_url: str
    postgrest_url: Optional[str] = None
    postgrest_api_key: Optional[str] = None
    postgrest_table: str = "auth"


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    log_level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_signing_config(self) -> SigningConfig:
        """Get token signing configuration."""
        ...

    def get_store_config(self) -> StoreConfig:
        """Get credential store configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_signing_config(self) -> SigningConfig:
        """
        Get signing configuration from environment variables.

        Raises:
            ConfigurationError: If JWT_SECRET is missing or the lifetimes are invalid
        """
        # No default secret - serving with an undefined key is a misconfiguration
        secret = os.getenv("JWT_SECRET")
        if not secret:
            raise ConfigurationError(
                "JWT_SECRET environment variable is required. "
                "Set it to the secret used to sign dashboard tokens."
            )

        ttl = _int_env("TOKEN_TTL_SECONDS", 3600)
        if ttl <= 0:
            raise ConfigurationError("TOKEN_TTL_SECONDS must be positive")

        leeway = _int_env("TOKEN_LEEWAY_SECONDS", 0)
        if leeway < 0:
            raise ConfigurationError("TOKEN_LEEWAY_SECONDS must not be negative")

        return SigningConfig(secret=secret, token_ttl_seconds=ttl, leeway_seconds=leeway)

    def get_store_config(self) -> StoreConfig:
        """Get credential store configuration from environment variables."""
        backend = os.getenv("CREDENTIAL_STORE", "redis").lower()
        if backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"CREDENTIAL_STORE must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}"
            )

        postgrest_url = os.getenv("POSTGREST_URL")
        if backend == "postgrest" and not postgrest_url:
            raise ConfigurationError(
                "POSTGREST_URL environment variable is required when CREDENTIAL_STORE=postgrest"
            )

        return StoreConfig(
            backend=backend,
            account_id=os.getenv("DASHBOARD_ACCOUNT_ID", "dashboard"),
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            postgrest_url=postgrest_url.rstrip("/") if postgrest_url else None,
            postgrest_api_key=os.getenv("POSTGREST_API_KEY"),
            postgrest_table=os.getenv("POSTGREST_TABLE", "auth"),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=_int_env("API_PORT", 8080),
            host=os.getenv("API_HOST", "0.0.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
