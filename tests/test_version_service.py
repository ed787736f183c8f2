import asyncio

from aiohttp import ClientConnectionError

from conftest import DummySession
from version_service import (
    FALLBACK_VERSION,
    VERSION_TTL,
    VERSIONS_URL,
    get_current_patch,
    get_data_dragon_url,
    get_latest_version,
)


def test_latest_version_is_first_entry(cache):
    session = DummySession({VERSIONS_URL: (200, ["26.2.1", "26.1.1", "25.24.1"])})
    assert asyncio.run(get_latest_version(session, cache)) == "26.2.1"


def test_version_is_cached_for_an_hour(cache, clock):
    session = DummySession({VERSIONS_URL: (200, ["26.1.1"])})

    async def run():
        first = await get_latest_version(session, cache)
        session.routes[VERSIONS_URL] = (200, ["27.0.1"])
        clock.advance(VERSION_TTL - 1)
        second = await get_latest_version(session, cache)
        clock.advance(1)
        third = await get_latest_version(session, cache)
        return first, second, third

    assert asyncio.run(run()) == ("26.1.1", "26.1.1", "27.0.1")
    assert session.count(VERSIONS_URL) == 2


def test_fallback_is_not_cached(cache):
    session = DummySession({VERSIONS_URL: (500, None)})

    async def run():
        fallback = await get_latest_version(session, cache)
        assert cache.size() == 0
        session.routes[VERSIONS_URL] = (200, ["26.3.1"])
        return fallback, await get_latest_version(session, cache)

    assert asyncio.run(run()) == (FALLBACK_VERSION, "26.3.1")


def test_fallback_on_connection_error(cache, capsys):
    session = DummySession({VERSIONS_URL: ClientConnectionError("no route")})
    assert asyncio.run(get_latest_version(session, cache)) == FALLBACK_VERSION
    assert "[Version] Failed to fetch latest version" in capsys.readouterr().out


def test_fallback_on_empty_version_list(cache):
    session = DummySession({VERSIONS_URL: (200, [])})
    assert asyncio.run(get_latest_version(session, cache)) == FALLBACK_VERSION


def test_fallback_on_unexpected_payload(cache):
    for payload in ({"error": "maintenance"}, [None], "26.2.1"):
        session = DummySession({VERSIONS_URL: (200, payload)})
        assert asyncio.run(get_latest_version(session, cache)) == FALLBACK_VERSION
    assert cache.size() == 0


def test_data_dragon_url(cache):
    session = DummySession({VERSIONS_URL: (200, ["26.2.1"])})
    url = asyncio.run(get_data_dragon_url(session, cache, "/data/en_US/item.json"))
    assert url == "https://ddragon.leagueoflegends.com/cdn/26.2.1/data/en_US/item.json"


def test_current_patch():
    assert get_current_patch() == "26.1.1"
