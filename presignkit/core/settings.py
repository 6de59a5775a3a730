"""Configuration for presignkit."""

from typing import Any, Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from presignkit.core.exceptions import S3ConfigurationError

# Short keys accepted by ``merge`` for compatibility with loader-style configs
LEGACY_KEYS = {
    "KEY": "aws_access_key_id",
    "SECRET": "aws_secret_access_key",
    "REGION": "aws_default_region",
    "MAX_RETRIES": "aws_retry_attempts",
    "TIMEOUT": "aws_timeout",
}

# Pinned on every client; not configurable
S3_API_VERSION = "2006-03-01"


class PresignSettings(BaseSettings):
    """Settings used to build S3 client handles.

    Values are read from ``AWS_*`` environment variables or a ``.env`` file.
    Instances are frozen: use ``merge`` to derive an overridden copy.

    Attributes:
        aws_access_key_id: Access key ID (None to use the SDK's resolution)
        aws_secret_access_key: Secret access key
        aws_default_region: Region the client signs for
        aws_retry_attempts: Maximum attempts per request
        aws_timeout: Connect and read timeout in seconds
        aws_url: Optional endpoint override (LocalStack, MinIO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_default_region: str = "us-east-1"
    aws_retry_attempts: int = Field(3, ge=1)
    aws_timeout: float = Field(30.0, gt=0)
    aws_url: str | None = None

    def merge(self, overrides: Mapping[str, Any] | None) -> "PresignSettings":
        """Return a copy with ``overrides`` applied key by key.

        Args:
            overrides: Setting names or legacy keys mapped to new values

        Returns:
            A new settings value; ``self`` is left untouched

        Raises:
            S3ConfigurationError: If a key matches no setting
        """
        if not overrides:
            return self

        update: dict[str, Any] = {}
        unknown = []
        for key, value in overrides.items():
            name = LEGACY_KEYS.get(key, key)
            if name not in type(self).model_fields:
                unknown.append(key)
                continue
            update[name] = value

        if unknown:
            raise S3ConfigurationError(unknown_fields=unknown)

        # Re-validate so merged values get the same coercion as env values
        data = self.model_dump()
        data.update(update)
        return type(self).model_validate(data)


def load_settings(
    overrides: Mapping[str, Any] | None = None, **kwargs
) -> PresignSettings:
    """Load settings from the environment and merge optional overrides.

    Args:
        overrides: Custom configuration in key-value pairs
        **kwargs: Values passed straight to ``PresignSettings``

    Returns:
        The process-wide settings value
    """
    return PresignSettings(**kwargs).merge(overrides)
