"""S3 client handles and their per-context lifecycle."""

import asyncio
from collections.abc import Mapping, MutableMapping
from contextlib import AsyncExitStack
from typing import Any, Protocol, runtime_checkable

from aiobotocore.client import AioBaseClient
from aiobotocore.session import get_session
from botocore.config import Config

from presignkit.core.diagnostics import Diagnostics, now_ms
from presignkit.core.exceptions import S3ConnectionError
from presignkit.core.settings import S3_API_VERSION, PresignSettings

INIT_OPERATION = "AWS S3 Server Connection (presign)"


@runtime_checkable
class S3SignerProtocol(Protocol):
    """Protocol for the S3 client operations used to sign URLs."""

    async def generate_presigned_url(
        self, ClientMethod: str, Params: dict | None = None, **kwargs
    ) -> str:
        """Sign a request for ``ClientMethod``."""
        ...

    async def generate_presigned_post(
        self, Bucket: str, Key: str, **kwargs
    ) -> dict[str, Any]:
        """Sign a browser-form POST upload policy."""
        ...


@runtime_checkable
class ClientFactory(Protocol):
    """Builds an S3 client handle bound to an exit stack."""

    async def create(
        self, settings: PresignSettings, exit_stack: AsyncExitStack
    ) -> S3SignerProtocol:
        ...


def build_client_config(settings: PresignSettings) -> Config:
    """Create the botocore config for a client handle.

    Args:
        settings: presignkit settings

    Returns:
        botocore Config with retries, timeouts and SigV4 signing
    """
    options: dict[str, Any] = {
        "signature_version": "s3v4",
        "retries": {
            "max_attempts": settings.aws_retry_attempts,
            "mode": "standard",
        },
        "connect_timeout": settings.aws_timeout,
        "read_timeout": settings.aws_timeout,
    }
    # Custom endpoints (LocalStack, MinIO) need path-style addressing
    if settings.aws_url:
        options["s3"] = {"addressing_style": "path"}
    return Config(**options)


class AioClientFactory:
    """Creates aiobotocore S3 clients.

    The aiobotocore session is created lazily and reused for every client
    this factory builds.
    """

    def __init__(self):
        self._session = None

    async def create(
        self, settings: PresignSettings, exit_stack: AsyncExitStack
    ) -> AioBaseClient:
        """Create a client and register its cleanup on ``exit_stack``.

        Args:
            settings: presignkit settings
            exit_stack: Stack that closes the client when the context is released

        Returns:
            An aiobotocore S3 client
        """
        if self._session is None:
            self._session = get_session()

        creator = self._session.create_client(
            "s3",
            region_name=settings.aws_default_region,
            api_version=S3_API_VERSION,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            endpoint_url=settings.aws_url,
            config=build_client_config(settings),
        )
        return await exit_stack.enter_async_context(creator)


class InstanceContext:
    """Per-request context the issuer attaches its S3 client handle to.

    The context owns the handle: release it with ``await context.close()``
    or by using the context as an async context manager.

    Example:
        async with InstanceContext() as context:
            result = await issuer.issue_get_download(context, "bucket", "key")
    """

    def __init__(self, time_ms: float | None = None):
        """Initialize the context.

        Args:
            time_ms: Request start time in milliseconds (defaults to now)
        """
        self.time_ms = now_ms() if time_ms is None else time_ms
        self.aws: dict[str, Any] = {}

    async def close(self) -> None:
        """Close the attached client handle, if any."""
        await release_client(self)

    async def __aenter__(self) -> "InstanceContext":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def _lookup(holder, name: str) -> Any:
    if isinstance(holder, Mapping):
        return holder.get(name)
    return getattr(holder, name, None)


def _attach(holder, name: str, value: Any) -> None:
    if isinstance(holder, MutableMapping):
        holder[name] = value
    else:
        setattr(holder, name, value)


def _detach(holder, name: str) -> Any:
    value = _lookup(holder, name)
    if isinstance(holder, MutableMapping):
        holder.pop(name, None)
    elif value is not None:
        setattr(holder, name, None)
    return value


def context_start_ms(context) -> float | None:
    """Request start time of ``context`` in milliseconds, if it has one."""
    return _lookup(context, "time_ms")


async def ensure_client(
    context,
    settings: PresignSettings,
    factory: ClientFactory,
    diagnostics: Diagnostics,
) -> S3SignerProtocol:
    """Return the context's S3 client, creating it on first use.

    The context may be a mapping (``context["aws"]["s3"]``) or any object
    with attributes (``context.aws``); the ``aws`` namespace likewise.

    A per-context lock serializes first use, so concurrent callers on one
    context build exactly one handle. Handles are never shared between
    contexts.

    Args:
        context: Caller-owned context object
        settings: Settings the handle is built from
        factory: Client factory
        diagnostics: Diagnostics sink for timing markers

    Returns:
        The S3 client attached to ``context``

    Raises:
        S3ConnectionError: If the client cannot be created
    """
    namespace = _lookup(context, "aws")
    if namespace is None:
        namespace = {}
        _attach(context, "aws", namespace)

    client = _lookup(namespace, "s3")
    if client is not None:
        return client

    lock = _lookup(namespace, "s3_lock")
    if lock is None:
        lock = asyncio.Lock()
        _attach(namespace, "s3_lock", lock)

    async with lock:
        # Another caller may have finished initialization while we waited
        client = _lookup(namespace, "s3")
        if client is not None:
            return client

        start_ms = context_start_ms(context)
        diagnostics.timing_audit_log("Init-Start", INIT_OPERATION, start_ms)
        exit_stack = _lookup(namespace, "exit_stack")
        if exit_stack is None:
            exit_stack = AsyncExitStack()
            _attach(namespace, "exit_stack", exit_stack)
        try:
            client = await factory.create(settings, exit_stack)
        except Exception as e:
            raise S3ConnectionError(
                original_error=e, endpoint=settings.aws_url
            ) from e
        _attach(namespace, "s3", client)
        diagnostics.timing_audit_log("Init-End", INIT_OPERATION, start_ms)

    return client


async def release_client(context) -> None:
    """Close the client handle attached to ``context`` and detach it.

    Args:
        context: Context previously passed to ``ensure_client``
    """
    namespace = _lookup(context, "aws")
    if namespace is None:
        return
    _detach(namespace, "s3")
    exit_stack = _detach(namespace, "exit_stack")
    if exit_stack is not None:
        await exit_stack.aclose()
