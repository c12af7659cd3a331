"""Configuration providers for Keygate."""

from .provider import (
    APIConfig,
    ConfigProvider,
    ConfigurationError,
    EnvConfigProvider,
    SigningConfig,
    StoreConfig,
)

__all__ = [
    "APIConfig",
    "ConfigProvider",
    "ConfigurationError",
    "EnvConfigProvider",
    "SigningConfig",
    "StoreConfig",
]
