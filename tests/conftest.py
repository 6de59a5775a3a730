"""Shared fixtures for presignkit tests."""

import pytest

from presignkit.testing.fixtures import (  # noqa: F401
    client_factory,
    diagnostics,
    instance_context,
    issuer,
    mock_signer,
    presign_settings,
)

AWS_ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_DEFAULT_REGION",
    "AWS_RETRY_ATTEMPTS",
    "AWS_TIMEOUT",
    "AWS_URL",
)


@pytest.fixture(autouse=True)
def clean_aws_env(monkeypatch, tmp_path):
    """Keep the developer's AWS environment and .env file out of the tests."""
    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
