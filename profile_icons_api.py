from aiohttp import ClientSession

from data_cache import DataCache
from fetch import CDRAGON_DATA_URL, LOCALE, fetch_json
from version_service import get_data_dragon_url

ICON_SORTS = ("id-asc", "id-desc")


class ProfileIconsApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_profile_icons(self) -> dict[str, dict]:
        async def produce():
            url = await get_data_dragon_url(self.session, self.cache, f"/data/{LOCALE}/profileicon.json")
            data = await fetch_json(self.session, url, "profile icons")
            return data["data"]

        return await self.cache.get("profileicons-all", produce)


def profile_icon_url(icon_id) -> str:
    return f"{CDRAGON_DATA_URL}/profile-icons/{icon_id}.jpg"


def filter_profile_icons(icons: list[tuple[str, dict]], search: str = None,
                         id_min: int = None, id_max: int = None):
    result = icons
    if search:
        result = [(i, icon) for i, icon in result if search.lower() in i]
    if id_min is not None:
        result = [(i, icon) for i, icon in result if int(i) >= id_min]
    if id_max is not None:
        result = [(i, icon) for i, icon in result if int(i) <= id_max]
    return result


def sort_profile_icons(icons: list[tuple[str, dict]], sort_by: str = "id-asc"):
    return sorted(icons, key=lambda pair: int(pair[0]), reverse=sort_by == "id-desc")
