"""
Unit tests for the environment configuration provider.
"""

import os
from unittest.mock import patch

import pytest

from keygate.config.provider import ConfigurationError, EnvConfigProvider


def test_signing_config_defaults():
    with patch.dict(os.environ, {"JWT_SECRET": "s"}, clear=True):
        config = EnvConfigProvider().get_signing_config()

    assert config.secret == "s"
    assert config.token_ttl_seconds == 3600
    assert config.leeway_seconds == 0


@pytest.mark.parametrize("env", [{}, {"JWT_SECRET": ""}])
def test_signing_config_requires_secret(env):
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(ConfigurationError, match="JWT_SECRET"):
            EnvConfigProvider().get_signing_config()


@pytest.mark.parametrize(
    "env",
    [
        {"TOKEN_TTL_SECONDS": "0"},
        {"TOKEN_TTL_SECONDS": "-5"},
        {"TOKEN_TTL_SECONDS": "an hour"},
        {"TOKEN_LEEWAY_SECONDS": "-1"},
    ],
)
def test_signing_config_rejects_invalid_lifetimes(env):
    with patch.dict(os.environ, {"JWT_SECRET": "s", **env}, clear=True):
        with pytest.raises(ConfigurationError):
            EnvConfigProvider().get_signing_config()


def test_store_config_defaults():
    with patch.dict(os.environ, {}, clear=True):
        config = EnvConfigProvider().get_store_config()

    assert config.backend == "redis"
    assert config.account_id == "dashboard"
    assert config.redis_url == "redis://localhost:6379/0"
    assert config.postgrest_url is None
    assert config.postgrest_table == "auth"


def test_store_config_postgrest():
    env = {
        "CREDENTIAL_STORE": "PostgREST",
        "POSTGREST_URL": "https://db.example.com/",
        "POSTGREST_API_KEY": "service-key",
        "POSTGREST_TABLE": "credentials",
        "DASHBOARD_ACCOUNT_ID": "ops",
    }
    with patch.dict(os.environ, env, clear=True):
        config = EnvConfigProvider().get_store_config()

    assert config.backend == "postgrest"
    assert config.postgrest_url == "https://db.example.com"
    assert config.postgrest_api_key == "service-key"
    assert config.postgrest_table == "credentials"
    assert config.account_id == "ops"


def test_store_config_postgrest_requires_url():
    with patch.dict(os.environ, {"CREDENTIAL_STORE": "postgrest"}, clear=True):
        with pytest.raises(ConfigurationError, match="POSTGREST_URL"):
            EnvConfigProvider().get_store_config()


def test_store_config_rejects_unknown_backend():
    with patch.dict(os.environ, {"CREDENTIAL_STORE": "mongo"}, clear=True):
        with pytest.raises(ConfigurationError, match="CREDENTIAL_STORE"):
            EnvConfigProvider().get_store_config()


def test_api_config():
    env = {"API_HOST": "127.0.0.1", "API_PORT": "9000", "LOG_LEVEL": "debug"}
    with patch.dict(os.environ, env, clear=True):
        config = EnvConfigProvider().get_api_config()

    assert config.host == "127.0.0.1"
    assert config.port == 9000
    assert config.log_level == "DEBUG"
