"""Storage utilities for presignkit.

This module provides signed URL generation so clients can upload and
download objects directly, without routing file bytes through your server.
"""

from presignkit.storage.signed_urls import (
    OperationKind,
    PresignedPost,
    SignedURL,
    SignedURLIssuer,
    SignedURLRequest,
    SignedURLResult,
    SigningFailure,
)

__all__ = [
    "OperationKind",
    "PresignedPost",
    "SignedURL",
    "SignedURLIssuer",
    "SignedURLRequest",
    "SignedURLResult",
    "SigningFailure",
]
