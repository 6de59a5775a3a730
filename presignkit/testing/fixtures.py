"""Pytest fixtures for presignkit testing.

To use these fixtures, add to your conftest.py:

    pytest_plugins = ["presignkit.testing.fixtures"]
"""

import pytest

from presignkit.core.client import InstanceContext
from presignkit.core.diagnostics import Diagnostics
from presignkit.core.settings import PresignSettings
from presignkit.storage.signed_urls import SignedURLIssuer
from presignkit.testing.mocks import FakeClientFactory, InMemorySigner
from presignkit.testing.utils import create_test_settings


@pytest.fixture
def presign_settings() -> PresignSettings:
    """Provide test settings for presignkit."""
    return create_test_settings()


@pytest.fixture
def mock_signer() -> InMemorySigner:
    """Provide an in-memory signer."""
    signer = InMemorySigner()
    yield signer
    signer.clear()


@pytest.fixture
def client_factory(mock_signer: InMemorySigner) -> FakeClientFactory:
    """Provide a client factory that hands out ``mock_signer``."""
    return FakeClientFactory(mock_signer)


@pytest.fixture
def diagnostics() -> Diagnostics:
    """Provide a diagnostics sink."""
    return Diagnostics()


@pytest.fixture
def issuer(
    presign_settings: PresignSettings,
    client_factory: FakeClientFactory,
    diagnostics: Diagnostics,
) -> SignedURLIssuer:
    """Provide a signed URL issuer wired to the mock signer."""
    return SignedURLIssuer(
        settings=presign_settings,
        client_factory=client_factory,
        diagnostics=diagnostics,
    )


@pytest.fixture
def instance_context() -> InstanceContext:
    """Provide a fresh request context."""
    return InstanceContext()
