from aiohttp import ClientSession

DDRAGON_URL = "https://ddragon.leagueoflegends.com"
DDRAGON_CDN_URL = f"{DDRAGON_URL}/cdn"
CDRAGON_RAW_URL = "https://raw.communitydragon.org/latest"
CDRAGON_DATA_URL = f"{CDRAGON_RAW_URL}/plugins/rcp-be-lol-game-data/global/default/v1"
CDRAGON_CDN_URL = "https://cdn.communitydragon.org/latest"
LOCALE = "en_US"


class DataFetchError(RuntimeError):
    def __init__(self, message: str, url: str, status: int):
        super().__init__(f"{message} ({status})")
        self.url = url
        self.status = status


async def fetch_json(session: ClientSession, url: str, what: str):
    """
    GET a JSON document.
    :raises DataFetchError: Raised when the response is not a 200.
    """
    headers = { "Accept": "application/json" }
    async with session.get(url, headers=headers) as resp:
        if resp.status == 200:
            # Community Dragon serves some files as text/plain
            return await resp.json(content_type=None)
        raise DataFetchError(f"Failed to fetch {what}", url, resp.status)


def cdragon_asset(path: str) -> str:
    """Turns a /lol-game-data/assets/... path into a raw Community Dragon URL."""
    if not path:
        return ""
    return f"{CDRAGON_RAW_URL}{path.lower()}"


def contains(value, query: str) -> bool:
    return bool(value) and query in value.lower()
