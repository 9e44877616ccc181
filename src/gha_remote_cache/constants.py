"""Constants for gha-remote-cache."""

# Protocol version combined with every artifact path
CACHE_VERSION = "10"

# Accept header pinned on every cache service request
API_ACCEPT = "application/json;api-version=6.0-preview.1"

# Upload chunk size (matches the actions/toolkit cache client)
CHUNK_SIZE = 32 * 1024 * 1024

# Service endpoints, relative to the base URL
QUERY_PATH = "_apis/artifactcache/cache"
CACHES_PATH = "_apis/artifactcache/caches"

# Environment variables
CACHE_URL_ENV = "ACTIONS_CACHE_URL"
RUNTIME_TOKEN_ENV = "ACTIONS_RUNTIME_TOKEN"
