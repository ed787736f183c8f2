from aiohttp import ClientSession

from data_cache import DataCache
from fetch import CDRAGON_DATA_URL, cdragon_asset, contains, fetch_json


class EmotesApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_emotes(self) -> list[dict]:
        async def produce():
            return await fetch_json(self.session, f"{CDRAGON_DATA_URL}/summoner-emotes.json", "emotes")

        return await self.cache.get("emotes-all", produce)


def emote_icon(icon_path: str) -> str:
    return cdragon_asset(icon_path)


def filter_emotes(emotes: list[dict], search: str = None, champion_id: int = None) -> list[dict]:
    # Community Dragon ships placeholder entries with no name or icon
    result = [e for e in emotes if e.get("name") and e.get("inventoryIcon")]
    if search:
        query = search.lower()
        result = [e for e in result if contains(e["name"], query) or contains(e.get("description"), query)]
    if champion_id:
        result = [e for e in result if champion_id in (e.get("taggedChampionsIds") or [])]
    return result
