from aiohttp import ClientSession

from data_cache import DataCache
from fetch import CDRAGON_DATA_URL, cdragon_asset, contains, fetch_json

TIER_COLORS = {
    "UNRANKED": "#4A4A4A",
    "IRON": "#6C6C6C",
    "BRONZE": "#8B4513",
    "SILVER": "#C0C0C0",
    "GOLD": "#FFD700",
    "PLATINUM": "#2ECC71",
    "DIAMOND": "#3498DB",
    "MASTER": "#9B59B6",
    "GRANDMASTER": "#E74C3C",
    "CHALLENGER": "#F39C12",
}

# (upper bound in percent, tier), checked in order
TIER_THRESHOLDS = [
    (10, "IRON"),
    (25, "BRONZE"),
    (40, "SILVER"),
    (60, "GOLD"),
    (75, "PLATINUM"),
    (90, "DIAMOND"),
]


class ChallengesApi:
    def __init__(self, session: ClientSession, cache: DataCache):
        self.session = session
        self.cache = cache

    async def fetch_all_challenges(self) -> list[dict]:
        async def produce():
            # challenges.json is an object keyed by challenge id
            data = await fetch_json(self.session, f"{CDRAGON_DATA_URL}/challenges.json", "challenges")
            return list(data.values())

        return await self.cache.get("challenges-all", produce)


def challenge_icon(icon_path: str) -> str:
    return cdragon_asset(icon_path)


def filter_challenges(challenges: list[dict], search: str = None) -> list[dict]:
    result = [c for c in challenges if c.get("name")]
    if search:
        query = search.lower()
        result = [c for c in result
                  if contains(c["name"], query)
                  or contains(c.get("description"), query)
                  or contains(c.get("shortDescription"), query)]
    return result


def calculate_challenge_tier(completed: int, total: int) -> str:
    if total <= 0:
        return "UNRANKED"
    percent = completed / total * 100
    if percent == 0:
        return "UNRANKED"
    for bound, tier in TIER_THRESHOLDS:
        if percent < bound:
            return tier
    return "MASTER"


def tier_color(tier: str) -> str:
    return TIER_COLORS.get(tier, TIER_COLORS["UNRANKED"])
