"""Storage package for remote cache backends."""

from .base import StorageProvider, WriteSink
from .factory import create_github_actions_cache
from .github_actions import CacheUpload, GithubActionsCache, GithubActionsStorage, UploadState

__all__ = [
    "CacheUpload",
    "GithubActionsCache",
    "GithubActionsStorage",
    "StorageProvider",
    "UploadState",
    "WriteSink",
    "create_github_actions_cache",
]
