"""Custom exceptions for gha-remote-cache.

Three kinds of failure are distinguished so callers can decide what to do:
configuration problems (fatal before any request), cache misses (proceed
without the cache) and service errors (fatal to the current operation).
"""

from typing import List, Optional


class CacheError(RuntimeError):
    """Base class for all cache-related errors."""
    pass


# Configuration Errors
class CacheConfigError(CacheError):
    """Required configuration value is missing or empty."""
    pass


# Lookup Errors
class CacheNotFoundError(CacheError):
    """No usable entry for the requested keys (cache miss)."""

    def __init__(self, keys: List[str], version: str, status_code: Optional[int] = None):
        self.keys = keys
        self.version = version
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Cache entry not found: {','.join(keys)}@{version}{detail}")


# Service Errors
class CacheServiceError(CacheError):
    """Cache service returned an error or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class BlobFetchError(CacheServiceError):
    """Entry was resolved but downloading its archive failed."""
    pass


class ReservationError(CacheServiceError):
    """Cache service refused to reserve an upload session."""
    pass


class UploadError(CacheServiceError):
    """Chunk upload or finalize failed.

    No abort request is sent, so the reserved session is left incomplete on
    the service side until it expires there.
    """
    pass
