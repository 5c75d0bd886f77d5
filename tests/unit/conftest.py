"""Shared pytest fixtures for unit tests."""

import os

# Set environment variables before any imports
os.environ.setdefault("BITBUCKET_ENDPOINT", "http://bitbucket.example.com")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from pathlib import Path
from unittest.mock import AsyncMock
from unittest.mock import MagicMock

import aiohttp
import pytest

from bitbucket_server.client.api import BitbucketApi
from bitbucket_server.client.lib.utils import JSON_ACCEPT

ENDPOINT = "http://bitbucket.example.com"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


def payload_from_resource(name: str) -> str:
    """Read a canned response body from the fixtures directory."""
    return (FIXTURES_DIR / name.lstrip("/")).read_text()


def create_async_context_manager(return_value):
    """Create an async context manager that returns the given value."""
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=return_value)
    ctx.__aexit__ = AsyncMock(return_value=None)
    return ctx


def assert_sent(session, method: str, url: str, params: dict | None = None, accept: str = JSON_ACCEPT):
    """Assert the single request sent through a mocked session."""
    session.request.assert_called_once()
    args, kwargs = session.request.call_args
    assert args[0] == method
    assert str(args[1]) == url
    assert kwargs["params"] == (params or {})
    assert kwargs["headers"]["Accept"] == accept


@pytest.fixture
def mock_response():
    """Create a mock aiohttp response."""

    def _mock_response(status: int = 200, text_data: str = ""):
        response = AsyncMock(spec=aiohttp.ClientResponse)
        response.status = status
        response.text = AsyncMock(return_value=text_data)
        return response

    return _mock_response


@pytest.fixture
def mock_session(mock_response):
    """Create a mock aiohttp session answering every request with the same response."""

    def _mock_session(status: int = 200, text_data: str = ""):
        session = MagicMock(spec=aiohttp.ClientSession)
        session.request.return_value = create_async_context_manager(mock_response(status, text_data))
        session.close = AsyncMock()
        return session

    return _mock_session


@pytest.fixture
def make_api(mock_session):
    """Create a BitbucketApi backed by a mocked session."""

    def _make_api(status: int = 200, text_data: str = ""):
        session = mock_session(status, text_data)
        api = BitbucketApi(ENDPOINT, username="admin", password="admin", session=session)
        return api, session

    return _make_api
