"""presignkit: temporary signed URLs for S3 uploads and downloads."""

__version__ = "0.1.0"

# Core components
from presignkit.core.client import (
    AioClientFactory,
    ClientFactory,
    InstanceContext,
    ensure_client,
    release_client,
)
from presignkit.core.diagnostics import Diagnostics
from presignkit.core.exceptions import (
    PresignError,
    S3ConnectionError,
    S3SigningError,
    S3ConfigurationError,
)
from presignkit.core.settings import PresignSettings, load_settings

# Storage components
from presignkit.storage import (
    OperationKind,
    PresignedPost,
    SignedURL,
    SignedURLIssuer,
    SignedURLRequest,
    SignedURLResult,
    SigningFailure,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "AioClientFactory",
    "ClientFactory",
    "InstanceContext",
    "ensure_client",
    "release_client",
    "Diagnostics",
    "PresignError",
    "S3ConnectionError",
    "S3SigningError",
    "S3ConfigurationError",
    "PresignSettings",
    "load_settings",
    # Storage
    "OperationKind",
    "PresignedPost",
    "SignedURL",
    "SignedURLIssuer",
    "SignedURLRequest",
    "SignedURLResult",
    "SigningFailure",
]
