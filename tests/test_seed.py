"""
Unit tests for the credential seeding command.
"""

import json
import os
from unittest.mock import patch

import pytest

from keygate.config.provider import EnvConfigProvider
from keygate.modules.auth.verifier import CredentialVerifier
from keygate.seed import build_credential, parse_args, run

from conftest import TEST_API_KEY


def test_build_credential_verifies():
    credential = build_credential(TEST_API_KEY)

    CredentialVerifier().verify(credential.hash, credential.salt, TEST_API_KEY)


def test_build_credential_uses_fresh_salts():
    assert build_credential(TEST_API_KEY).salt != build_credential(TEST_API_KEY).salt


def test_build_credential_with_given_salt():
    credential = build_credential("s3cr3t", salt="abc")

    assert credential.salt == "abc"
    CredentialVerifier().verify(credential.hash, "abc", "s3cr3t")


@pytest.mark.asyncio
async def test_run_writes_redis_record(redis_mock):
    args = parse_args(["--api-key", TEST_API_KEY, "--account-id", "ops"])

    with patch.dict(os.environ, {}, clear=True):
        code = await run(args, EnvConfigProvider(), redis_client=redis_mock)

    assert code == 0
    redis_mock.hset.assert_called_once()
    key = redis_mock.hset.call_args.args[0]
    mapping = redis_mock.hset.call_args.kwargs["mapping"]
    assert key == "auth:ops"
    CredentialVerifier().verify(mapping["hash"], mapping["salt"], TEST_API_KEY)


@pytest.mark.asyncio
async def test_run_defaults_to_configured_account(redis_mock):
    args = parse_args(["--api-key", TEST_API_KEY])

    with patch.dict(os.environ, {"DASHBOARD_ACCOUNT_ID": "dashboard-2"}, clear=True):
        await run(args, EnvConfigProvider(), redis_client=redis_mock)

    assert redis_mock.hset.call_args.args[0] == "auth:dashboard-2"


@pytest.mark.asyncio
async def test_run_print_only(redis_mock, capsys):
    args = parse_args(["--api-key", TEST_API_KEY, "--print-only"])

    with patch.dict(os.environ, {}, clear=True):
        code = await run(args, EnvConfigProvider(), redis_client=redis_mock)

    assert code == 0
    redis_mock.hset.assert_not_called()
    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["id"] == "dashboard"
    CredentialVerifier().verify(record["hash"], record["salt"], TEST_API_KEY)


@pytest.mark.asyncio
async def test_run_postgrest_prints_record(redis_mock, capsys):
    env = {"CREDENTIAL_STORE": "postgrest", "POSTGREST_URL": "https://db.example.com"}
    args = parse_args(["--api-key", TEST_API_KEY])

    with patch.dict(os.environ, env, clear=True):
        code = await run(args, EnvConfigProvider(), redis_client=redis_mock)

    assert code == 0
    redis_mock.hset.assert_not_called()
    assert json.loads(capsys.readouterr().out.strip())["id"] == "dashboard"


@pytest.mark.asyncio
async def test_run_generates_api_key(redis_mock, capsys):
    args = parse_args([])

    with patch.dict(os.environ, {}, clear=True):
        await run(args, EnvConfigProvider(), redis_client=redis_mock)

    output = capsys.readouterr().out
    api_key = output.split("Generated API key: ", 1)[1].split()[0]
    mapping = redis_mock.hset.call_args.kwargs["mapping"]
    CredentialVerifier().verify(mapping["hash"], mapping["salt"], api_key)


@pytest.mark.asyncio
async def test_run_rejects_invalid_config(redis_mock):
    args = parse_args(["--api-key", TEST_API_KEY])

    with patch.dict(os.environ, {"CREDENTIAL_STORE": "mongo"}, clear=True):
        code = await run(args, EnvConfigProvider(), redis_client=redis_mock)

    assert code == 2
    redis_mock.hset.assert_not_called()
