from aiohttp import ClientSession

from data_cache import DataCache
from fetch import CDRAGON_DATA_URL, CDRAGON_RAW_URL, DDRAGON_CDN_URL, LOCALE, contains, fetch_json
from version_service import get_data_dragon_url

# Newest first. Release order can't be derived from champion ids.
LATEST_CHAMPION_IDS = [
    "Zaahen",
    "Yunara",
    "Mel",
    "Ambessa",
    "Aurora",
    "Smolder",
    "Hwei",
    "Briar",
    "Naafiri",
    "Milio",
]

SPELL_ICONS_URL = f"{CDRAGON_RAW_URL}/game/assets/characters/shared/spells/icons2d"


class ChampionsApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_champions(self) -> list[dict]:
        async def produce():
            url = await get_data_dragon_url(self.session, self.cache, f"/data/{LOCALE}/champion.json")
            data = await fetch_json(self.session, url, "champions")
            return list(data["data"].values())

        return await self.cache.get("champions-list", produce)

    async def fetch_latest_champions(self, count: int = 4) -> list[dict]:
        champions = await self.fetch_all_champions()
        latest = []
        for champion_id in LATEST_CHAMPION_IDS:
            match = next((c for c in champions if c["id"] == champion_id or c["name"] == champion_id), None)
            if match:
                latest.append(match)
        return latest[:count]

    async def fetch_champion_details(self, champion_id: str) -> dict:
        """
        :raises KeyError: Raised when the response doesn't contain the champion.
        """
        async def produce():
            url = await get_data_dragon_url(self.session, self.cache, f"/data/{LOCALE}/champion/{champion_id}.json")
            data = await fetch_json(self.session, url, f"details for {champion_id}")
            return data["data"][champion_id]

        return await self.cache.get(f"champion-{champion_id}", produce)


def filter_champions(champions: list[dict], search: str = None, tag: str = None) -> list[dict]:
    result = champions
    if search:
        query = search.lower()
        result = [c for c in result if contains(c.get("name"), query) or contains(c.get("title"), query)]
    if tag:
        result = [c for c in result if tag in c.get("tags", [])]
    return result


def champion_icon(champion_id) -> str:
    # Data Dragon images need a version, Community Dragon's "latest" doesn't
    return f"{CDRAGON_DATA_URL}/champion-icons/{champion_id}.png"


def champion_splash(champion_id: str, skin_num: int = 0) -> str:
    return f"{DDRAGON_CDN_URL}/img/champion/splash/{champion_id}_{skin_num}.jpg"


def champion_loading(champion_id: str, skin_num: int = 0) -> str:
    return f"{DDRAGON_CDN_URL}/img/champion/loading/{champion_id}_{skin_num}.jpg"


def ability_icon(image_name: str) -> str:
    return f"{SPELL_ICONS_URL}/{image_name.lower()}"


def passive_icon(image_name: str) -> str:
    return f"{SPELL_ICONS_URL}/{image_name.lower()}"
