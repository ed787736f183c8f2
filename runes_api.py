from aiohttp import ClientSession

from data_cache import DataCache
from fetch import CDRAGON_DATA_URL, cdragon_asset, contains, fetch_json

KEYSTONE_IDS = range(8000, 8500)


class RunesApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_runes(self) -> list[dict]:
        async def produce():
            return await fetch_json(self.session, f"{CDRAGON_DATA_URL}/perks.json", "runes")

        return await self.cache.get("runes-all", produce)


def rune_icon(icon_path: str) -> str:
    return cdragon_asset(icon_path)


def filter_runes(runes: list[dict], search: str = None, keystone: bool = False) -> list[dict]:
    result = runes
    if search:
        query = search.lower()
        result = [r for r in result if contains(r["name"], query) or contains(r.get("shortDesc"), query)]
    if keystone:
        result = [r for r in result if r["id"] in KEYSTONE_IDS]
    return result
