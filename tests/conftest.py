import os
import sys

import pytest

# Ensure repository root is on sys.path so the top-level modules import under pytest
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from data_cache import DataCache


class FakeClock:
    """Millisecond clock the tests move forward by hand."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


class DummyResponse:
    def __init__(self, status: int, payload=None):
        self.status = status
        self.payload = payload

    async def json(self, content_type="application/json"):
        return self.payload


class DummyContext:
    def __init__(self, response: DummyResponse):
        self.response = response

    async def __aenter__(self):
        return self.response

    async def __aexit__(self, exc_type, exc, tb):
        pass


class DummySession:
    """
    Stands in for aiohttp.ClientSession. Routes map a URL to a (status, payload) pair,
    or to an exception instance which is raised on request.
    """

    def __init__(self, routes: dict = None):
        self.routes = routes or {}
        self.requests = []

    def get(self, url, headers=None, **kwargs):
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return DummyContext(DummyResponse(404))
        if isinstance(route, Exception):
            raise route
        status, payload = route
        return DummyContext(DummyResponse(status, payload))

    def count(self, url) -> int:
        return self.requests.count(url)

    async def close(self):
        pass


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return DataCache(clock=clock)
