"""Custom exceptions for presignkit.

These exceptions are raised inside the library and carry hints to make
debugging easier. The signed URL issuer absorbs them: callers only ever see
a ``SigningFailure`` result unless they explicitly call ``unwrap()``.
"""


class PresignError(Exception):
    """Base exception for all presignkit errors."""

    def __init__(self, message: str, hint: str | None = None):
        """Initialize the exception.

        Args:
            message: The error message
            hint: Optional hint for resolving the error
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class S3ConnectionError(PresignError):
    """Raised when the S3 client handle cannot be created."""

    def __init__(
        self,
        message: str | None = None,
        original_error: Exception | None = None,
        endpoint: str | None = None,
    ):
        """Initialize the connection error.

        Args:
            message: Custom error message (optional)
            original_error: The original exception that caused this error
            endpoint: The S3 endpoint URL being connected to
        """
        self.original_error = original_error
        self.endpoint = endpoint

        if message:
            final_message = message
            hint = None
        elif original_error:
            final_message, hint = self._format_error(original_error, endpoint)
        else:
            final_message = "Failed to create S3 client"
            hint = "Check your AWS credentials and region."

        super().__init__(final_message, hint)

    def _format_error(
        self, error: Exception, endpoint: str | None
    ) -> tuple[str, str | None]:
        """Format the error message based on the underlying error."""
        error_str = str(error)

        if "UnknownRegion" in error_str or "Invalid region" in error_str:
            return (
                "Invalid AWS region",
                "Check your AWS_DEFAULT_REGION environment variable.",
            )

        if "Invalid endpoint" in error_str:
            return (
                f"Invalid S3 endpoint {endpoint or 'AWS'}",
                "Check the AWS_URL environment variable.",
            )

        if "PartialCredentials" in error_str or "partial credentials" in error_str:
            return (
                "Incomplete AWS credentials",
                "Set both AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY.",
            )

        return (f"S3 client error: {error}", None)


class S3SigningError(PresignError):
    """Raised when a signed URL could not be issued.

    Deliberately carries no SDK detail: only the operation that failed.
    """

    def __init__(self, operation: str):
        """Initialize the signing error.

        Args:
            operation: The signing operation that failed ('POST', 'PUT' or 'GET')
        """
        self.operation = operation
        super().__init__(
            f"Signing operation failed: {operation}",
            "See the presignkit.core.diagnostics log for the underlying error.",
        )


class S3ConfigurationError(PresignError):
    """Raised when presignkit configuration is invalid."""

    def __init__(
        self,
        message: str | None = None,
        unknown_fields: list[str] | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Custom error message
            unknown_fields: Override keys that match no setting
        """
        self.unknown_fields = unknown_fields or []

        if unknown_fields:
            fields_str = ", ".join(unknown_fields)
            message = f"Unknown configuration keys: {fields_str}"
            hint = "Use KEY, SECRET, REGION, MAX_RETRIES, TIMEOUT or a setting name."
        else:
            hint = "Check your presignkit configuration."

        super().__init__(message or "Invalid presignkit configuration", hint)
