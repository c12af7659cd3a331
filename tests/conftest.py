"""
Shared pytest fixtures for Keygate tests.

This module provides common fixtures including:
- Redis mocks for store and audit tests
- A signing secret and token issuer
- A seeded dashboard credential
"""

import os
import sys
from unittest.mock import AsyncMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from keygate.modules.auth.tokens import SigningKeys, TokenIssuer
from keygate.modules.auth.verifier import hash_secret

TEST_SECRET = "test-signing-secret-that-is-long-enough-for-hs256"
TEST_API_KEY = "s3cr3t"
TEST_SALT = "abc"


@pytest.fixture
def signing_keys():
    """Signing keys derived from the test secret."""
    return SigningKeys.from_secret(TEST_SECRET)


@pytest.fixture
def issuer(signing_keys):
    """Token issuer with a one hour token lifetime."""
    return TokenIssuer(signing_keys, token_ttl_seconds=3600)


@pytest.fixture
def stored_record():
    """Redis hash for the dashboard credential."""
    return {"hash": hash_secret(TEST_API_KEY, TEST_SALT), "salt": TEST_SALT}


@pytest.fixture
def redis_mock(stored_record):
    """Create a mock Redis client holding the dashboard credential."""
    redis = AsyncMock()
    redis.hgetall = AsyncMock(return_value=stored_record)
    redis.hset = AsyncMock()
    redis.lrange = AsyncMock(return_value=[])
    redis.lpush = AsyncMock()
    redis.ltrim = AsyncMock()
    return redis
