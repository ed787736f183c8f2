from aiohttp import ClientSession

from data_cache import DataCache
from fetch import DDRAGON_CDN_URL, LOCALE, contains, fetch_json
from version_service import get_current_patch, get_data_dragon_url

SPELL_SORTS = ("name", "cooldown", "level")


class SummonerSpellsApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_summoner_spells(self) -> dict[str, dict]:
        async def produce():
            url = await get_data_dragon_url(self.session, self.cache, f"/data/{LOCALE}/summoner.json")
            data = await fetch_json(self.session, url, "summoner spells")
            return data["data"]

        return await self.cache.get("summoner-spells-all", produce)


def summoner_spell_icon(image_name: str) -> str:
    return f"{DDRAGON_CDN_URL}/{get_current_patch()}/img/spell/{image_name}"


def _base_cooldown(spell: dict) -> float:
    cooldown = spell.get("cooldown") or [0]
    return cooldown[0]


def filter_summoner_spells(spells: list[tuple[str, dict]], search: str = None, mode: str = None):
    result = spells
    if search:
        query = search.lower()
        result = [(i, s) for i, s in result if contains(s["name"], query) or contains(s.get("description"), query)]
    if mode:
        result = [(i, s) for i, s in result if mode in (s.get("modes") or [])]
    return result


def sort_summoner_spells(spells: list[tuple[str, dict]], sort_by: str):
    match sort_by:
        case "name":
            return sorted(spells, key=lambda pair: pair[1]["name"].lower())
        case "cooldown":
            return sorted(spells, key=lambda pair: _base_cooldown(pair[1]))
        case "level":
            return sorted(spells, key=lambda pair: pair[1]["summonerLevel"])
    return list(spells)
