#!/usr/bin/env python3
"""
Seed the dashboard credential record.

Generates a salt, hashes the API key and writes the (hash, salt) record to
Redis. With the PostgREST backend, or with --print-only, the record is printed
as JSON for insertion into the auth table instead.
"""

import argparse
import asyncio
import json
import logging
import secrets
import sys
from typing import Optional

from keygate.config.provider import ConfigProvider, ConfigurationError, EnvConfigProvider
from keygate.logging_config import configure_logging
from keygate.modules.auth.interfaces import StoredCredential
from keygate.modules.auth.verifier import generate_salt, hash_secret
from keygate.modules.storage import RedisCredentialStore, StorageModule

logger = logging.getLogger(__name__)


def build_credential(api_key: str, salt: Optional[str] = None) -> StoredCredential:
    """Hash an API key with a fresh (or given) salt."""
    salt = salt or generate_salt()
    return StoredCredential(hash=hash_secret(api_key, salt), salt=salt)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the Keygate dashboard credential")
    parser.add_argument("--api-key", help="API key to store (default: generate one)")
    parser.add_argument("--account-id", help="Credential record id (default: DASHBOARD_ACCOUNT_ID)")
    parser.add_argument(
        "--print-only", action="store_true", help="Print the record instead of writing it"
    )
    return parser.parse_args(argv)


async def run(
    args: argparse.Namespace,
    config_provider: Optional[ConfigProvider] = None,
    redis_client=None,
) -> int:
    """
    Build the credential record and store or print it.

    Returns:
        Process exit code
    """
    config_provider = config_provider or EnvConfigProvider()
    try:
        store_config = config_provider.get_store_config()
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    account_id = args.account_id or store_config.account_id
    api_key = args.api_key
    if not api_key:
        api_key = secrets.token_urlsafe(32)
        print(f"Generated API key: {api_key}")

    credential = build_credential(api_key)

    if args.print_only or store_config.backend == "postgrest":
        print(json.dumps({"id": account_id, "hash": credential.hash, "salt": credential.salt}))
        return 0

    storage = None
    if redis_client is None:
        storage = StorageModule(store_config.redis_url)
        redis_client = await storage.connect()

    try:
        await RedisCredentialStore(redis_client).store_credential(account_id, credential)
    finally:
        if storage:
            await storage.disconnect()

    logger.info(f"Stored credential record auth:{account_id}")
    return 0


def main(argv=None):
    """Console entry point."""
    configure_logging(EnvConfigProvider().get_api_config().log_level)
    sys.exit(asyncio.run(run(parse_args(argv))))


if __name__ == "__main__":
    main()
