from aiohttp import ClientSession

from data_cache import DataCache
from fetch import CDRAGON_DATA_URL, cdragon_asset, contains, fetch_json

WARD_SORTS = ("name", "id")


class WardsApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_ward_skins(self) -> list[dict]:
        async def produce():
            return await fetch_json(self.session, f"{CDRAGON_DATA_URL}/ward-skins.json", "ward skins")

        return await self.cache.get("wardskins-all", produce)


def ward_skin_image(image_path: str) -> str:
    return cdragon_asset(image_path)


def filter_ward_skins(wards: list[dict], search: str = None) -> list[dict]:
    result = [w for w in wards if w.get("name") and w.get("wardImagePath")]
    if search:
        query = search.lower()
        result = [w for w in result if contains(w["name"], query) or contains(w.get("description"), query)]
    return result


def sort_ward_skins(wards: list[dict], sort_by: str) -> list[dict]:
    match sort_by:
        case "name":
            return sorted(wards, key=lambda w: w["name"].lower())
        case "id":
            return sorted(wards, key=lambda w: w["id"], reverse=True)
    return list(wards)
