"""Base protocol for remote cache storage providers."""

from typing import BinaryIO, Callable, Optional, Protocol


class WriteSink(Protocol):
    """Writable destination returned by ``create_write_stream``."""

    def write(self, data: bytes) -> int:
        ...

    def close(self) -> None:
        ...


class StorageProvider(Protocol):
    """
    Protocol for remote cache storage providers.

    These three operations are everything the cache server needs from a
    backend. Artifact paths are opaque to the provider.
    """

    def create_read_stream(self, artifact_path: str) -> BinaryIO:
        """
        Open a cached artifact for reading.

        Args:
            artifact_path: Artifact path used as the cache key

        Returns:
            Readable binary stream with the artifact content

        Raises:
            CacheNotFoundError: If no entry exists for the path
        """
        ...

    def create_write_stream(self, artifact_path: str) -> WriteSink:
        """
        Open a destination for a new artifact.

        Content is stored when the returned sink is closed.

        Args:
            artifact_path: Artifact path used as the cache key

        Returns:
            Writable sink
        """
        ...

    def exists(self, artifact_path: str) -> bool:
        """
        Check whether an artifact is cached.

        A miss returns False; any other failure is raised.

        Args:
            artifact_path: Artifact path to check

        Returns:
            True if an entry exists
        """
        ...

    def exists_callback(
        self,
        artifact_path: str,
        cb: Callable[[Optional[BaseException], bool], None],
    ) -> None:
        """Callback form of ``exists``: ``cb(error, exists)``."""
        ...
