"""Shared test fixtures and utilities."""

import json
from unittest.mock import Mock

import pytest

from gha_remote_cache.storage import GithubActionsCache

CACHE_URL = "https://artifactcache.actions.example.com/abc123/"
TOKEN = "test-token"


def _make_response(status_code=200, json_data=None, text="", raw=None):
    """Build a fake requests.Response with the attributes the client reads."""
    res = Mock()
    res.status_code = status_code
    res.ok = status_code < 400
    if json_data is not None:
        res.text = json.dumps(json_data)
        res.json.return_value = json_data
    else:
        res.text = text
        res.json.side_effect = ValueError("Expecting value")
    res.content = res.text.encode()
    res.raw = raw
    return res


@pytest.fixture
def make_response():
    """Factory for fake responses."""
    return _make_response


@pytest.fixture
def session():
    """Mock requests session; tests set request.side_effect or return_value."""
    return Mock()


@pytest.fixture
def cache(session):
    """Cache client wired to the mock session."""
    return GithubActionsCache(CACHE_URL, TOKEN, session=session)


@pytest.fixture
def cache_env(monkeypatch):
    """Set both required environment variables."""
    monkeypatch.setenv("ACTIONS_CACHE_URL", CACHE_URL)
    monkeypatch.setenv("ACTIONS_RUNTIME_TOKEN", TOKEN)
