"""Remote artifact cache backend for the GitHub Actions cache service."""

from .config import CacheSettings
from .constants import CACHE_VERSION, CHUNK_SIZE
from .errors import (
    BlobFetchError,
    CacheConfigError,
    CacheError,
    CacheNotFoundError,
    CacheServiceError,
    ReservationError,
    UploadError,
)
from .storage import (
    CacheUpload,
    GithubActionsCache,
    GithubActionsStorage,
    StorageProvider,
    UploadState,
    create_github_actions_cache,
)

__version__ = "0.1.0"

__all__ = [
    "BlobFetchError",
    "CACHE_VERSION",
    "CHUNK_SIZE",
    "CacheConfigError",
    "CacheError",
    "CacheNotFoundError",
    "CacheServiceError",
    "CacheSettings",
    "CacheUpload",
    "GithubActionsCache",
    "GithubActionsStorage",
    "ReservationError",
    "StorageProvider",
    "UploadError",
    "UploadState",
    "create_github_actions_cache",
]
