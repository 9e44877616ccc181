"""Factory for creating cache storage providers."""

from typing import Mapping, Optional

import requests

from ..config import CacheSettings
from .base import StorageProvider
from .github_actions import GithubActionsCache, GithubActionsStorage


def create_github_actions_cache(
    environ: Optional[Mapping[str, str]] = None,
    session: Optional[requests.Session] = None,
) -> StorageProvider:
    """
    Create a GitHub Actions cache provider from the environment.

    Configuration is validated before any client or session is built, so a
    misconfigured environment never reaches the network.

    Args:
        environ: Mapping to read settings from (defaults to os.environ)
        session: Optional requests session to send requests with

    Returns:
        StorageProvider backed by the GitHub Actions cache service

    Raises:
        CacheConfigError: If ACTIONS_CACHE_URL or ACTIONS_RUNTIME_TOKEN is missing
    """
    settings = CacheSettings.from_env(environ)
    cache = GithubActionsCache(settings.url, settings.token, session=session)
    return GithubActionsStorage(cache)
