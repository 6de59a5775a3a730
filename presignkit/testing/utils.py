"""Testing utilities for presignkit."""

from presignkit.core.settings import PresignSettings


def create_test_settings(region: str = "us-east-1", **overrides) -> PresignSettings:
    """Create presignkit settings for testing.

    Args:
        region: AWS region the test clients sign for
        **overrides: Additional settings to override

    Returns:
        PresignSettings instance configured for testing
    """
    return PresignSettings(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        aws_default_region=region,
        **overrides,
    )
