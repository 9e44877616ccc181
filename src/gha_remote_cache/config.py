"""Cache service configuration read from the process environment."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, field_validator

from .constants import CACHE_URL_ENV, RUNTIME_TOKEN_ENV
from .errors import CacheConfigError


class CacheSettings(BaseModel):
    """Connection settings for the cache service."""
    url: str      # Base URL, always ends with "/"
    token: str    # Bearer token

    @field_validator("url")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """Endpoint paths are appended directly to the base URL."""
        if not v:
            raise ValueError("url must not be empty")
        return v.rstrip("/") + "/"

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        if not v:
            raise ValueError("token must not be empty")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CacheSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Validated CacheSettings

        Raises:
            CacheConfigError: If a required variable is missing or empty
        """
        env = os.environ if environ is None else environ
        for name in (CACHE_URL_ENV, RUNTIME_TOKEN_ENV):
            if not env.get(name):
                raise CacheConfigError(f"missing {name}")
        return cls(url=env[CACHE_URL_ENV], token=env[RUNTIME_TOKEN_ENV])
