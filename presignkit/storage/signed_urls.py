"""Signed URL issuance for direct client uploads and downloads."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, Field, model_validator

from presignkit.core.client import (
    AioClientFactory,
    ClientFactory,
    context_start_ms,
    ensure_client,
)
from presignkit.core.diagnostics import Diagnostics
from presignkit.core.exceptions import S3SigningError
from presignkit.core.settings import PresignSettings, load_settings

Callback = Callable[[Any], Any]


class OperationKind(str, Enum):
    """Kinds of signed URL the issuer can produce."""

    POST = "POST"
    PUT = "PUT"
    GET = "GET"


# Names used in timing markers and failure descriptions
OPERATION_LABELS = {
    OperationKind.POST: ("AWS S3 Signed URL - Upload file (POST)", "Upload File (POST)"),
    OperationKind.PUT: ("AWS S3 Signed URL - Upload file (PUT)", "Upload File (PUT)"),
    OperationKind.GET: ("AWS S3 Signed URL - Get file", "Get file URL"),
}


class SignedURLRequest(BaseModel):
    """A request for one signed URL.

    Attributes:
        operation: POST, PUT or GET
        bucket: S3 bucket holding the object
        key: Full path to the object
        expire_time: URL lifetime in seconds (0 or None leaves the SDK default)
        max_allowed_size: Maximum upload size in bytes, POST only (0 or None = no limit)
    """

    operation: OperationKind
    bucket: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)
    expire_time: int | None = Field(None, ge=0)
    max_allowed_size: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def _size_limit_only_for_post(self) -> "SignedURLRequest":
        if self.max_allowed_size and self.operation is not OperationKind.POST:
            raise ValueError("max_allowed_size only applies to POST uploads")
        return self


@dataclass(frozen=True)
class PresignedPost:
    """Signed URL plus the form fields a browser must POST with it."""

    url: str
    fields: dict[str, str] = field(default_factory=dict)

    ok = True

    def unwrap(self) -> "PresignedPost":
        return self

    def to_callback_value(self) -> dict:
        return {"url": self.url, "fields": dict(self.fields)}


@dataclass(frozen=True)
class SignedURL:
    """Signed URL for a PUT upload or a GET download."""

    url: str

    ok = True

    def unwrap(self) -> "SignedURL":
        return self

    def to_callback_value(self) -> str:
        return self.url


@dataclass(frozen=True)
class SigningFailure:
    """A signing operation failed.

    Only the operation kind is exposed; the underlying error goes to the
    diagnostics sink.
    """

    operation: OperationKind

    ok = False

    def unwrap(self):
        raise S3SigningError(self.operation.value)

    def to_callback_value(self) -> bool:
        return False


SignedURLResult = PresignedPost | SignedURL | SigningFailure


def _serialize(*params: dict) -> str:
    return "".join(json.dumps(p, default=str) for p in params)


class SignedURLIssuer:
    """Issues temporary signed URLs for S3 objects.

    Every operation performs one SDK presign call. Errors are never raised
    to the caller: they are logged through the diagnostics sink and
    reported as ``SigningFailure``.

    Example:
        issuer = SignedURLIssuer(load_settings({"REGION": "eu-west-1"}))

        async with InstanceContext() as context:
            post = await issuer.issue_post_upload(
                context, "uploads", "client_upload/new_img.jpg",
                expire_time=600, max_allowed_size=1048576,
            )
            if post.ok:
                ...  # hand post.url and post.fields to the browser
    """

    def __init__(
        self,
        settings: PresignSettings | None = None,
        client_factory: ClientFactory | None = None,
        diagnostics: Diagnostics | None = None,
    ):
        """Initialize the issuer.

        Args:
            settings: Settings used to build client handles
            client_factory: Factory for client handles (aiobotocore by default)
            diagnostics: Diagnostics sink
        """
        self.settings = settings or load_settings()
        self.client_factory = client_factory or AioClientFactory()
        self.diagnostics = diagnostics or Diagnostics()

    async def issue(
        self,
        context,
        request: SignedURLRequest,
        callback: Callback | None = None,
    ) -> SignedURLResult:
        """Issue the signed URL described by ``request``."""
        if request.operation is OperationKind.POST:
            return await self.issue_post_upload(
                context,
                request.bucket,
                request.key,
                expire_time=request.expire_time,
                max_allowed_size=request.max_allowed_size,
                callback=callback,
            )
        if request.operation is OperationKind.PUT:
            return await self.issue_put_upload(
                context,
                request.bucket,
                request.key,
                expire_time=request.expire_time,
                callback=callback,
            )
        return await self.issue_get_download(
            context,
            request.bucket,
            request.key,
            expire_time=request.expire_time,
            callback=callback,
        )

    async def issue_post_upload(
        self,
        context,
        bucket: str,
        key: str,
        expire_time: int | None = None,
        max_allowed_size: int | None = None,
        callback: Callback | None = None,
    ) -> SignedURLResult:
        """Get a signed URL to upload an object with a browser form POST.

        Args:
            context: Request context the client handle is cached on
            bucket: S3 bucket the file is uploaded to
            key: Full path of the file
            expire_time: URL lifetime in seconds (0 or None = SDK default)
            max_allowed_size: Max file size in bytes (0 or None = no limit)
            callback: Invoked once with ``{"url", "fields"}`` or ``False``

        Returns:
            PresignedPost on success, SigningFailure otherwise
        """
        service_params: dict[str, Any] = {
            "Bucket": bucket,
            "Key": key,
            "Fields": {},
            "Conditions": [],
        }
        if max_allowed_size is not None and max_allowed_size > 0:
            service_params["Conditions"].append(
                ["content-length-range", 0, max_allowed_size]
            )
        if expire_time is not None and expire_time > 0:
            service_params["ExpiresIn"] = expire_time

        async def sign(client):
            data = await client.generate_presigned_post(**service_params)
            return PresignedPost(url=data["url"], fields=dict(data["fields"]))

        return await self._run(
            context, OperationKind.POST, sign, (service_params,), callback
        )

    async def issue_put_upload(
        self,
        context,
        bucket: str,
        key: str,
        expire_time: int | None = None,
        callback: Callback | None = None,
    ) -> SignedURLResult:
        """Get a signed URL to upload an object with HTTP PUT.

        Args:
            context: Request context the client handle is cached on
            bucket: S3 bucket the file is uploaded to
            key: Full path of the file
            expire_time: URL lifetime in seconds (0 or None = SDK default)
            callback: Invoked once with the URL or ``False``

        Returns:
            SignedURL on success, SigningFailure otherwise
        """
        return await self._sign_object_url(
            context, OperationKind.PUT, "put_object", bucket, key, expire_time, callback
        )

    async def issue_get_download(
        self,
        context,
        bucket: str,
        key: str,
        expire_time: int | None = None,
        callback: Callback | None = None,
    ) -> SignedURLResult:
        """Get a signed URL to download an object.

        Args:
            context: Request context the client handle is cached on
            bucket: S3 bucket holding the file
            key: Full path of the file
            expire_time: URL lifetime in seconds (0 or None = SDK default)
            callback: Invoked once with the URL or ``False``

        Returns:
            SignedURL on success, SigningFailure otherwise
        """
        return await self._sign_object_url(
            context, OperationKind.GET, "get_object", bucket, key, expire_time, callback
        )

    async def _sign_object_url(
        self,
        context,
        operation: OperationKind,
        client_method: str,
        bucket: str,
        key: str,
        expire_time: int | None,
        callback: Callback | None,
    ) -> SignedURLResult:
        command_params = {"Bucket": bucket, "Key": key}
        signer_params: dict[str, Any] = {}
        if expire_time is not None and expire_time > 0:
            signer_params["ExpiresIn"] = expire_time

        async def sign(client):
            url = await client.generate_presigned_url(
                ClientMethod=client_method, Params=command_params, **signer_params
            )
            return SignedURL(url=url)

        return await self._run(
            context, operation, sign, (command_params, signer_params), callback
        )

    async def _run(
        self,
        context,
        operation: OperationKind,
        sign: Callable[[Any], Awaitable[SignedURLResult]],
        params: tuple[dict, ...],
        callback: Callback | None,
    ) -> SignedURLResult:
        """Run one signing call and normalize its outcome.

        Client initialization and the SDK call share one failure path: the
        error is logged for research and the result is a SigningFailure.
        """
        timing_label, cmd_label = OPERATION_LABELS[operation]
        start_ms = context_start_ms(context)

        try:
            client = await ensure_client(
                context, self.settings, self.client_factory, self.diagnostics
            )
            self.diagnostics.timing_audit_log("Start", timing_label, start_ms)
            result = await sign(client)
            self.diagnostics.timing_audit_log("End", timing_label, start_ms)
        except Exception as e:
            self.diagnostics.log_error_for_research(
                e,
                "Cause: AWS S3 Signed URL"
                f"\ncmd: {cmd_label}"
                f"\nparams: {_serialize(*params)}",
            )
            result = SigningFailure(operation)

        if callback is not None:
            callback(result.to_callback_value())
        return result
