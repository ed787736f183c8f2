import json
from dataclasses import asdict, dataclass, field

from aiofiles import open as aio_open

from data_cache import DataCache
from fetch import CDRAGON_CDN_URL, contains

SKIN_SORTS = ("name", "date", "price")


class SkinsDataError(RuntimeError):
    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


@dataclass
class Skin:
    id: int
    num: int
    name: str
    champion: str
    champion_id: int
    chromas: bool
    price: int | str
    release_date: str
    distribution: str
    splash_image: str
    rarity: str | None = None
    sale: bool = False
    set: list[str] = field(default_factory=list)
    region: list[str] = field(default_factory=list)

    def numeric_price(self) -> int:
        # Prices like "Special" or "Not for sale" count as 0
        return self.price if isinstance(self.price, int) else 0

    def to_dict(self):
        return asdict(self)


def _distribution(raw: dict) -> str:
    if raw.get("isPrestige"):
        return "Prestige"
    if raw.get("isEsports"):
        return "Esports"
    return "Standard"


def parse_skin(raw: dict) -> Skin:
    return Skin(
        id=int(raw["skin_id"]),
        num=raw["skin_num"],
        name=raw["skin_name"],
        champion=raw["champion"],
        # Images are keyed by champion id, not skin id
        champion_id=int(raw["champion_id"]),
        chromas=raw.get("chromas", False),
        price=raw.get("price", 0),
        release_date=raw.get("release_date", ""),
        distribution=_distribution(raw),
        splash_image=raw.get("splashPath", ""),
        rarity=raw.get("rarity"),
    )


class SkinsApi:
    def __init__(self, cache: DataCache, data_path: str):
        self.cache = cache
        self.data_path = data_path

    async def fetch_all_skins(self) -> list[Skin]:
        async def produce():
            try:
                async with aio_open(self.data_path, mode="r", encoding="utf-8") as f:
                    raw = json.loads(await f.read())
            except (OSError, ValueError) as e:
                raise SkinsDataError(f"Failed to load skins data from {self.data_path}: {e}", self.data_path) from e
            return [parse_skin(item) for item in raw]

        return await self.cache.get("skins-all", produce)


def skin_splash_art(champion_id: int, skin_num: int) -> str:
    return f"{CDRAGON_CDN_URL}/champion/{champion_id}/splash-art/skin/{skin_num}"


def skin_tile(champion_id: int, skin_num: int) -> str:
    return f"{CDRAGON_CDN_URL}/champion/{champion_id}/tile/skin/{skin_num}"


def filter_skins(skins: list[Skin], search: str = None, prestige: bool = False, esports: bool = False,
                 chromas: bool = None, price_min: int = None, price_max: int = None) -> list[Skin]:
    result = skins
    if search:
        query = search.lower()
        result = [s for s in result if contains(s.name, query) or contains(s.champion, query)]
    if prestige:
        result = [s for s in result if "prestige" in s.name.lower() or s.distribution == "Prestige"]
    if esports:
        result = [s for s in result
                  if s.distribution == "Esports" or "Championship" in s.name or "Worlds" in s.name]
    if chromas is not None:
        result = [s for s in result if s.chromas == chromas]
    if price_min is not None:
        result = [s for s in result if s.numeric_price() >= price_min]
    if price_max is not None:
        result = [s for s in result if s.numeric_price() <= price_max]
    return result


def sort_skins(skins: list[Skin], sort_by: str) -> list[Skin]:
    match sort_by:
        case "name":
            return sorted(skins, key=lambda s: s.name.lower())
        case "date":
            # ISO dates sort lexically; newest first
            return sorted(skins, key=lambda s: s.release_date, reverse=True)
        case "price":
            return sorted(skins, key=Skin.numeric_price, reverse=True)
    return list(skins)
