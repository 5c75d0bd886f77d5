"""Shared pytest fixtures for functional tests.

These tests run the client against an in-process aiohttp server that replays
canned responses and records every request it receives.
"""

import os

os.environ.setdefault("BITBUCKET_ENDPOINT", "http://localhost")

from pathlib import Path

import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

FIXTURES_DIR = Path(__file__).parent.parent / "unit" / "fixtures"


def payload_from_resource(name: str) -> str:
    return (FIXTURES_DIR / name.lstrip("/")).read_text()


class MockBitbucketServer:
    """Replays enqueued responses in order and records the received requests."""

    def __init__(self):
        self.responses = []
        self.requests = []
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self.handle)
        self.server = TestServer(app)

    def enqueue(self, body: str, status: int = 200, content_type: str = "application/json") -> None:
        self.responses.append((status, body, content_type))

    async def handle(self, request: web.Request) -> web.Response:
        form = None
        if request.method in ("PUT", "POST"):
            form = dict(await request.post())
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "raw_path": request.rel_url.raw_path,
                "query": dict(request.query),
                "headers": dict(request.headers),
                "content_type": request.content_type,
                "form": form,
            }
        )
        if not self.responses:
            return web.Response(status=500, text="no response enqueued")
        status, body, content_type = self.responses.pop(0)
        return web.Response(status=status, text=body, content_type=content_type)

    @property
    def url(self) -> str:
        return str(self.server.make_url("/")).rstrip("/")

    def take_request(self) -> dict:
        return self.requests.pop(0)


@pytest_asyncio.fixture
async def mock_server():
    """Start a mock Bitbucket server for the duration of a test."""
    server = MockBitbucketServer()
    await server.server.start_server()
    try:
        yield server
    finally:
        await server.server.close()
