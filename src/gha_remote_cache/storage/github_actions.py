"""GitHub Actions cache service backend.

Lookups resolve (keys, version) to a single-use archive URL and then download
it. Uploads reserve a session, buffer everything the caller writes, and on
close send the payload as fixed-size PATCH chunks followed by a finalize POST.

Every request is issued one at a time and none is retried. A failed upload
leaves its reserved session incomplete on the service; no abort is sent.
"""

import logging
import urllib.parse
from enum import Enum
from typing import BinaryIO, Callable, Dict, List, Optional, Type

import requests

from ..constants import API_ACCEPT, CACHE_VERSION, CACHES_PATH, QUERY_PATH
from ..errors import (
    BlobFetchError,
    CacheNotFoundError,
    CacheServiceError,
    ReservationError,
    UploadError,
)
from ..storage_models import CacheEntry, CacheKey, CommitRequest, ReserveRequest, ReserveResponse, plan_chunks

logger = logging.getLogger(__name__)


def _encode(value: str) -> str:
    """Percent-encode a URL component like JavaScript's encodeURIComponent."""
    return urllib.parse.quote(value, safe="!~*'()")


class GithubActionsCache:
    """
    Client for the GitHub Actions artifact cache service.

    The base URL must end with "/"; endpoint paths are appended to it.
    """

    def __init__(self, url: str, token: str, session: Optional[requests.Session] = None):
        """
        Initialize the cache client.

        Args:
            url: Cache service base URL
            token: Bearer token for the service
            session: Optional requests session (a new one is created if omitted)
        """
        self.url = url if url.endswith("/") else url + "/"
        self.token = token
        self.session = session if session is not None else requests.Session()

    def _headers(self, content_type: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "Accept": API_ACCEPT,
            "Authorization": f"Bearer {self.token}",
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _request(
        self,
        method: str,
        url: str,
        error_cls: Type[CacheServiceError] = CacheServiceError,
        **kwargs,
    ) -> requests.Response:
        """Send one request, mapping transport failures to ``error_cls``."""
        try:
            return self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise error_cls(f"Cannot connect to cache service: {e}") from e

    def get_meta(self, keys: List[str], version: str) -> CacheEntry:
        """
        Resolve keys and version to a cache entry.

        Any non-success status is reported as a miss: the service does not
        distinguish a missing key from other failures at this endpoint.

        Args:
            keys: Cache key segments
            version: Cache version

        Returns:
            CacheEntry with the archive download location

        Raises:
            CacheNotFoundError: On a non-success status, an empty success body
                (the service answers a miss with 204 No Content) or a body
                without archiveLocation
            CacheServiceError: If the service is unreachable or the body is not JSON
        """
        key = CacheKey(keys=keys, version=version)
        logger.info(f"Getting {key.joined_keys} {version}")

        url = (
            f"{self.url}{QUERY_PATH}"
            f"?keys={_encode(key.joined_keys)}&version={_encode(version)}"
        )
        res = self._request("GET", url, headers=self._headers())
        if not res.ok:
            logger.debug(f"Cache miss for {key.joined_keys} (HTTP {res.status_code})")
            raise CacheNotFoundError(keys, version, res.status_code)

        # No Content: nothing to parse, so no archiveLocation either
        if not res.content:
            raise CacheNotFoundError(keys, version, res.status_code)

        try:
            body = res.json()
        except ValueError as e:
            raise CacheServiceError(
                f"Cache service returned invalid JSON for {key.joined_keys}: {e}: {res.text}",
                status_code=res.status_code,
                body=res.text,
            ) from e

        if not isinstance(body, dict) or not body.get("archiveLocation"):
            raise CacheNotFoundError(keys, version, res.status_code)
        return CacheEntry.model_validate(body)

    def get(self, keys: List[str], version: str) -> BinaryIO:
        """
        Download a cached archive.

        Args:
            keys: Cache key segments
            version: Cache version

        Returns:
            Readable binary stream over the archive body

        Raises:
            CacheNotFoundError: If the entry does not exist
            BlobFetchError: If the entry exists but its download fails
        """
        entry = self.get_meta(keys, version)

        # Archive URLs are pre-signed; no service headers
        res = self._request("GET", entry.archive_location, error_cls=BlobFetchError, stream=True)
        if not res.ok or res.raw is None:
            text = res.text if not res.ok else None
            res.close()
            raise BlobFetchError(
                f"Failed to fetch blob (HTTP {res.status_code}): {text or 'no response body'}",
                status_code=res.status_code,
                body=text,
            )

        res.raw.decode_content = True
        return res.raw

    def exists(self, keys: List[str], version: str) -> bool:
        """
        Check for a cache entry without downloading it.

        Returns:
            True if found, False on a miss

        Raises:
            CacheServiceError: For failures other than a miss
        """
        try:
            self.get_meta(keys, version)
        except CacheNotFoundError:
            return False
        return True

    def upload(self, key: str, version: str) -> "CacheUpload":
        """
        Reserve an upload session and return a sink for its content.

        Args:
            key: Cache key
            version: Cache version

        Returns:
            CacheUpload bound to the reserved session

        Raises:
            ReservationError: If the service does not grant a session
        """
        logger.info(f"Uploading {key} {version}")

        body = ReserveRequest(key=key, version=version)
        res = self._request(
            "POST",
            f"{self.url}{CACHES_PATH}",
            error_cls=ReservationError,
            headers=self._headers("application/json"),
            data=body.model_dump_json(),
        )
        if not res.ok:
            raise ReservationError(
                f"HTTP {res.status_code}: {res.text}",
                status_code=res.status_code,
                body=res.text,
            )

        try:
            reserved = ReserveResponse.model_validate(res.json())
        except ValueError as e:
            raise ReservationError(
                f"Invalid reservation response for {key}: {e}",
                status_code=res.status_code,
                body=res.text,
            ) from e

        return CacheUpload(self, reserved.cache_id)


class UploadState(str, Enum):
    """Lifecycle of a CacheUpload."""
    OPEN = "open"            # Accepting writes
    CLOSING = "closing"      # Chunks and finalize in flight
    COMPLETED = "completed"
    FAILED = "failed"


class CacheUpload:
    """
    Write sink for one reserved upload session.

    Writes only append to an in-memory buffer. ``close()`` sends the
    buffered payload in CHUNK_SIZE ranges, in order, then finalizes with
    the total size. The whole payload is held in memory until then.
    """

    def __init__(self, cache: GithubActionsCache, cache_id: str):
        self.cache = cache
        self.cache_id = cache_id
        self.state = UploadState.OPEN
        self.error: Optional[BaseException] = None
        self._buffer = bytearray()

    @property
    def closed(self) -> bool:
        return self.state is not UploadState.OPEN

    @property
    def size(self) -> int:
        """Bytes buffered so far."""
        return len(self._buffer)

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:
        """Append bytes to the payload. Raises ValueError once closed."""
        if self.state is not UploadState.OPEN:
            raise ValueError(f"write to {self.state.value} upload")
        before = len(self._buffer)
        self._buffer += data
        return len(self._buffer) - before

    def flush(self) -> None:
        pass

    def close(self) -> None:
        """
        Upload the buffered payload and finalize the session.

        Only the first call does any work.

        Raises:
            UploadError: If a chunk or the finalize request fails
        """
        if self.state is not UploadState.OPEN:
            return

        self.state = UploadState.CLOSING
        completed = False
        try:
            self._complete_upload()
            completed = True
        except Exception as e:
            self.error = e
            raise
        finally:
            # Interrupts also end here; CLOSING is never left behind
            self._buffer = bytearray()
            self.state = UploadState.COMPLETED if completed else UploadState.FAILED

    def discard(self) -> None:
        """Drop the payload without sending anything."""
        if self.state is UploadState.OPEN:
            logger.debug(f"Discarding upload for cache {self.cache_id}")
            self.state = UploadState.FAILED
            self._buffer = bytearray()

    def _complete_upload(self) -> None:
        cache = self.cache
        total = len(self._buffer)
        url = f"{cache.url}{CACHES_PATH}/{_encode(self.cache_id)}"

        with memoryview(self._buffer) as view:
            for chunk in plan_chunks(total):
                logger.info(f"Completing uploading chunk {chunk.index}")
                headers = cache._headers("application/octet-stream")
                headers["Content-Range"] = chunk.content_range
                res = cache._request(
                    "PATCH",
                    url,
                    error_cls=UploadError,
                    headers=headers,
                    data=bytes(view[chunk.start:chunk.end + 1]),
                )
                if not res.ok:
                    raise UploadError(
                        f"Failed to patch upload range for upload: {res.text}",
                        status_code=res.status_code,
                        body=res.text,
                    )

        logger.info("Completing upload for artifact")
        res = cache._request(
            "POST",
            url,
            error_cls=UploadError,
            headers=cache._headers("application/json"),
            data=CommitRequest(size=total).model_dump_json(),
        )
        if not res.ok:
            raise UploadError(
                f"Failed to finalize POST for upload: {res.text}",
                status_code=res.status_code,
                body=res.text,
            )

    def __enter__(self) -> "CacheUpload":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.discard()
            return
        self.close()


class GithubActionsStorage:
    """
    StorageProvider backed by the GitHub Actions cache.

    Each artifact path is used as the single cache key, paired with the
    fixed protocol version.
    """

    def __init__(self, cache: GithubActionsCache, version: str = CACHE_VERSION):
        self.cache = cache
        self.version = version

    def create_read_stream(self, artifact_path: str) -> BinaryIO:
        return self.cache.get([artifact_path], self.version)

    def create_write_stream(self, artifact_path: str) -> CacheUpload:
        return self.cache.upload(artifact_path, self.version)

    def exists(self, artifact_path: str) -> bool:
        return self.cache.exists([artifact_path], self.version)

    def exists_callback(
        self,
        artifact_path: str,
        cb: Callable[[Optional[BaseException], bool], None],
    ) -> None:
        """Report existence through ``cb(error, exists)``; a miss is ``(None, False)``."""
        try:
            found = self.exists(artifact_path)
        except Exception as e:
            cb(e, False)
            return
        cb(None, found)
