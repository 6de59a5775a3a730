"""Testing utilities for presignkit consumers.

Usage in conftest.py:
    from presignkit.testing import InMemorySigner, FakeClientFactory

    @pytest.fixture
    def issuer():
        factory = FakeClientFactory(InMemorySigner())
        return SignedURLIssuer(create_test_settings(), client_factory=factory)

Or use provided fixtures directly:
    pytest_plugins = ["presignkit.testing.fixtures"]
"""

from presignkit.testing.mocks import FakeClientFactory, InMemorySigner, mock_signer
from presignkit.testing.utils import create_test_settings

__all__ = [
    "FakeClientFactory",
    "InMemorySigner",
    "mock_signer",
    "create_test_settings",
]
