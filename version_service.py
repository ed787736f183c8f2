from aiohttp import ClientError, ClientSession

from data_cache import DataCache
from fetch import DDRAGON_CDN_URL, DDRAGON_URL, DataFetchError, fetch_json

VERSIONS_URL = f"{DDRAGON_URL}/api/versions.json"
VERSION_TTL = 60 * 60 * 1000 # 1 hour
FALLBACK_VERSION = "26.1.1"


async def get_latest_version(session: ClientSession, cache: DataCache) -> str:
    """
    Latest Data Dragon patch. Falls back to FALLBACK_VERSION when versions.json can't be fetched;
    the fallback is not cached so the next call tries again.
    """
    async def produce():
        versions = await fetch_json(session, VERSIONS_URL, "versions")
        if not isinstance(versions, list) or not versions or not isinstance(versions[0], str):
            raise ValueError(f"Unexpected versions payload: {versions!r}")
        # First entry is always the newest patch
        return versions[0]

    try:
        return await cache.get("ddragon-version", produce, VERSION_TTL)
    except (ClientError, DataFetchError, ValueError) as e:
        print(f"[Version] Failed to fetch latest version, using {FALLBACK_VERSION}: {e}")
        return FALLBACK_VERSION


async def get_data_dragon_url(session: ClientSession, cache: DataCache, path: str) -> str:
    version = await get_latest_version(session, cache)
    return f"{DDRAGON_CDN_URL}/{version}{path}"


def get_current_patch() -> str:
    # Synchronous callers can't await the lookup
    return FALLBACK_VERSION
