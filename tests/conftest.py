"""Test configuration and fixtures."""

from typing import Any, Callable, List, Optional

import httpx
import pytest

import hubapi.config
from hubapi.config import HubSpotConfig
from hubapi.connectors import Connection


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts and ends with the default process-wide config."""
    hubapi.config.reset()
    yield
    hubapi.config.reset()


class RecordingTransport:
    """Mock transport that records requests and answers via ``handler``."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_connection():
    """Build a connection whose HTTP traffic goes to a handler function.

    Returns (connection, recorder).
    """
    created: List[Connection] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        config: Optional[HubSpotConfig] = None,
        cls: Any = Connection,
    ):
        recorder = RecordingTransport(handler)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        connection = cls(config, client=client)
        created.append(connection)
        return connection, recorder

    yield _make

    for connection in created:
        connection.close()


@pytest.fixture
def json_handler():
    """Factory for handlers that always answer with a fixed JSON payload."""

    def _factory(payload: Any, status_code: int = 200):
        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=payload)

        return _handler

    return _factory
