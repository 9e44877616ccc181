"""Wire models for the artifact cache service.

Request and response bodies are modelled with pydantic so that field
aliases (the service speaks camelCase) and type coercion live in one place.
"""

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import CHUNK_SIZE


class CacheKey(BaseModel):
    """Keys and version identifying a cached artifact."""
    keys: List[str]
    version: str

    @property
    def joined_keys(self) -> str:
        return ",".join(self.keys)


class CacheEntry(BaseModel):
    """Result of a successful cache query."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    archive_location: str = Field(alias="archiveLocation")  # Single-use download URL


class ReserveRequest(BaseModel):
    """Body of the reservation POST."""
    key: str
    version: str


class ReserveResponse(BaseModel):
    """Reservation result carrying the upload session id."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cache_id: str = Field(alias="cacheId")

    @field_validator("cache_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Union[int, str]) -> str:
        """The service returns a numeric id; the client treats it as opaque."""
        if isinstance(v, bool) or v is None:
            raise ValueError("cacheId must be a string or integer")
        return str(v)


class CommitRequest(BaseModel):
    """Body of the finalize POST."""
    size: int = Field(ge=0)


class Chunk(BaseModel):
    """Contiguous byte range of an upload payload."""
    index: int
    start: int
    end: int      # Inclusive
    total: int    # Full payload length

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.total}"


def plan_chunks(total: int, chunk_size: int = CHUNK_SIZE) -> List[Chunk]:
    """
    Split a payload of ``total`` bytes into upload chunks.

    Args:
        total: Payload length in bytes
        chunk_size: Maximum bytes per chunk

    Returns:
        Chunks in increasing offset order; empty when total is 0
    """
    if total < 0:
        raise ValueError(f"total must be non-negative, got {total}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    chunks = []
    count = (total + chunk_size - 1) // chunk_size
    for i in range(count):
        start = i * chunk_size
        end = min(start + chunk_size, total) - 1
        chunks.append(Chunk(index=i, start=start, end=end, total=total))
    return chunks
