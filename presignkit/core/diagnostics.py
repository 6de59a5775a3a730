"""Diagnostics sink for signing operations.

Writes timing markers around outbound SDK calls and records failures with
enough context (operation, serialized parameters) for a postmortem.
"""

import logging
import time

logger = logging.getLogger(__name__)


def now_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000


class Diagnostics:
    """Logging-backed diagnostics sink.

    Example:
        diagnostics = Diagnostics()
        diagnostics.timing_audit_log("Start", "S3 Signed URL - Get file", context.time_ms)
    """

    def __init__(self, log: logging.Logger | None = None):
        """Initialize the sink.

        Args:
            log: Logger to write to (defaults to this module's logger)
        """
        self.logger = log or logger

    def log(self, *args) -> None:
        """Write a debug line made of ``args`` joined by spaces."""
        self.logger.debug(" ".join(str(arg) for arg in args))

    def timing_audit_log(
        self, phase: str, operation: str, start_time_ms: float | None
    ) -> None:
        """Record a timing marker for an operation.

        Args:
            phase: Marker name ('Start', 'End', 'Init-Start', 'Init-End')
            operation: Human readable operation name
            start_time_ms: Start of the enclosing request, in milliseconds
        """
        if start_time_ms is None:
            self.logger.debug(f"[{phase}] {operation}")
            return
        elapsed = now_ms() - start_time_ms
        self.logger.debug(f"[{phase}] {operation} +{elapsed:.1f}ms")

    def log_error_for_research(self, error: BaseException, context: str) -> None:
        """Record a failure together with a description of what was attempted.

        Args:
            error: The original exception
            context: Operation name and serialized parameters
        """
        self.logger.error(
            f"{context}\nerror: {type(error).__name__}: {error}",
            exc_info=(type(error), error, error.__traceback__),
        )
