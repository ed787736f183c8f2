from aiohttp import ClientSession

from data_cache import DataCache
from fetch import CDRAGON_RAW_URL, LOCALE, contains, fetch_json
from version_service import get_data_dragon_url

ITEM_SORTS = ("name", "price", "popular")


class ItemsApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_items(self) -> dict[str, dict]:
        async def produce():
            url = await get_data_dragon_url(self.session, self.cache, f"/data/{LOCALE}/item.json")
            data = await fetch_json(self.session, url, "items")
            return data["data"]

        return await self.cache.get("items-all", produce)


def item_icon(image_name: str) -> str:
    return f"{CDRAGON_RAW_URL}/game/assets/items/icons2d/{image_name.lower()}"


def _total(item: dict) -> int:
    return item["gold"]["total"]


def filter_items(items: list[tuple[str, dict]], search: str = None, tags: list[str] = None,
                 price_min: int = None, price_max: int = None, purchasable_only: bool = False):
    """
    Filter (id, item) pairs.
    :param search: Matched against name and plaintext
    :param tags: Keep items carrying at least one of these tags
    """
    result = items
    if search:
        query = search.lower()
        result = [(i, item) for i, item in result
                  if contains(item["name"], query) or contains(item.get("plaintext"), query)]
    if tags:
        result = [(i, item) for i, item in result if any(tag in item.get("tags", []) for tag in tags)]
    if price_min is not None:
        result = [(i, item) for i, item in result if _total(item) >= price_min]
    if price_max is not None:
        result = [(i, item) for i, item in result if _total(item) <= price_max]
    if purchasable_only:
        result = [(i, item) for i, item in result if item["gold"]["purchasable"]]
    return result


def sort_items(items: list[tuple[str, dict]], sort_by: str):
    match sort_by:
        case "name":
            return sorted(items, key=lambda pair: pair[1]["name"].lower())
        case "price":
            return sorted(items, key=lambda pair: _total(pair[1]), reverse=True)
        case _:
            # Data Dragon already lists the popular items first
            return list(items)


def item_tier(item: dict) -> str:
    total = _total(item)
    if "mythic" in item["name"].lower() or "Mythic Passive" in item.get("description", ""):
        return "Mythic"
    if total >= 3000:
        return "Legendary"
    if total >= 1000:
        return "Epic"
    if "Boots" in item.get("tags", []):
        return "Boots"
    if total < 500:
        return "Basic"
    return "Component"
