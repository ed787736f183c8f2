from typing import Awaitable, Callable

import aiojobs
from aiohttp import ClientError, ClientSession, web

from challenges_api import ChallengesApi, filter_challenges
from champions_api import ChampionsApi, filter_champions
from data_cache import DataCache
from emotes_api import EmotesApi, filter_emotes
from fetch import DataFetchError
from items_api import ITEM_SORTS, ItemsApi, filter_items, sort_items
from profile_icons_api import ICON_SORTS, ProfileIconsApi, filter_profile_icons, sort_profile_icons
from runes_api import RunesApi, filter_runes
from skins_api import SKIN_SORTS, SkinsApi, SkinsDataError, filter_skins, sort_skins
from summoner_spells_api import SPELL_SORTS, SummonerSpellsApi, filter_summoner_spells, sort_summoner_spells
from version_service import get_latest_version
from wards_api import WARD_SORTS, WardsApi, filter_ward_skins, sort_ward_skins

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

TRUTHY = ("1", "true", "yes", "on")


def _int_param(request: web.Request, name: str) -> int | None:
    value = request.query.get(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise web.HTTPBadRequest(text=f"Query parameter '{name}' must be an integer.")


def _bool_param(request: web.Request, name: str) -> bool | None:
    value = request.query.get(name)
    if value is None or value == "":
        return None
    return value.strip().lower() in TRUTHY


def _sort_param(request: web.Request, choices: tuple, default: str) -> str:
    value = request.query.get("sort", default)
    if value not in choices:
        raise web.HTTPBadRequest(text=f"Sort must be one of: {', '.join(choices)}.")
    return value


@web.middleware
async def upstream_error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """
    Turns failed upstream fetches into 502 responses and an unreadable skins file into a 503.
    The cache stores nothing for a failed fetch, so the client can simply retry.
    """
    try:
        return await handler(request)
    except (DataFetchError, ClientError) as e:
        print(f"[Server] Upstream error on {request.path}: {e}")
        return web.json_response({"error": str(e)}, status=502)
    except SkinsDataError as e:
        print(f"[Server] Skins data unavailable: {e}")
        return web.json_response({"error": str(e)}, status=503)


class Server(web.Application):
    """
    Subclass of aiohttp web.Application that serves the game data as JSON.
    Every data service shares the cache passed in by the owner.
    """

    def __init__(self, cache: DataCache, skins_path: str, session: ClientSession = None, warm_cache: bool = False):
        super().__init__(middlewares=[upstream_error_middleware])
        self.cache = cache
        self.skins_path = skins_path
        self.session = session
        self._owns_session = session is None
        self.warm_cache = warm_cache
        self.scheduler = None

        self.router.add_routes([
            web.get('/api/version', self._version_handler),
            web.get('/api/champions', self._champions_handler),
            web.get('/api/champions/latest', self._latest_champions_handler),
            web.get('/api/champions/{champion_id}', self._champion_details_handler),
            web.get('/api/items', self._items_handler),
            web.get('/api/skins', self._skins_handler),
            web.get('/api/runes', self._runes_handler),
            web.get('/api/emotes', self._emotes_handler),
            web.get('/api/icons', self._icons_handler),
            web.get('/api/wards', self._wards_handler),
            web.get('/api/spells', self._spells_handler),
            web.get('/api/challenges', self._challenges_handler),
            web.get('/api/admin/cache', self._cache_size_handler),
            web.delete('/api/admin/cache', self._cache_clear_handler),
            web.delete('/api/admin/cache/{key}', self._cache_remove_handler),
        ])

        self.on_startup.append(self._start_session)
        self.on_startup.append(self._start_warm_up)
        self.on_cleanup.append(self._stop_warm_up)
        self.on_cleanup.append(self._close_session)

    async def _start_session(self, _app: web.Application):
        if self.session is None:
            self.session = ClientSession()
        self.champions = ChampionsApi(self.session, self.cache)
        self.items = ItemsApi(self.session, self.cache)
        self.skins = SkinsApi(self.cache, self.skins_path)
        self.runes = RunesApi(self.session, self.cache)
        self.emotes = EmotesApi(self.session, self.cache)
        self.profile_icons = ProfileIconsApi(self.session, self.cache)
        self.wards = WardsApi(self.session, self.cache)
        self.summoner_spells = SummonerSpellsApi(self.session, self.cache)
        self.challenges = ChallengesApi(self.session, self.cache)

    async def _close_session(self, _app: web.Application):
        if self._owns_session and self.session is not None:
            await self.session.close()

    async def _start_warm_up(self, _app: web.Application):
        if not self.warm_cache:
            return
        self.scheduler = aiojobs.Scheduler()
        await self.scheduler.spawn(self._warm_up())

    async def _stop_warm_up(self, _app: web.Application):
        if self.scheduler:
            await self.scheduler.close()

    async def _warm_up(self):
        """
        Prefetch the data the landing page needs so the first request is a cache hit.
        """
        version = await get_latest_version(self.session, self.cache)
        try:
            await self.champions.fetch_all_champions()
        except (DataFetchError, ClientError) as e:
            print(f"[Server] Warm-up failed: {e}")
            return
        print(f"[Server] Cache warmed for patch {version} ({self.cache.size()} entries)")

    async def _version_handler(self, request: web.Request) -> web.Response:
        return web.json_response({"version": await get_latest_version(self.session, self.cache)})

    async def _champions_handler(self, request: web.Request) -> web.Response:
        champions = await self.champions.fetch_all_champions()
        return web.json_response(filter_champions(
            champions,
            search=request.query.get("search"),
            tag=request.query.get("tag"),
        ))

    async def _latest_champions_handler(self, request: web.Request) -> web.Response:
        count = _int_param(request, "count")
        return web.json_response(await self.champions.fetch_latest_champions(4 if count is None else count))

    async def _champion_details_handler(self, request: web.Request) -> web.Response:
        champion_id = request.match_info["champion_id"]
        try:
            details = await self.champions.fetch_champion_details(champion_id)
        except KeyError:
            raise web.HTTPNotFound(text=f"Champion '{champion_id}' not found.")
        except DataFetchError as e:
            # Data Dragon answers 403 for champions it doesn't know
            if e.status not in (403, 404):
                raise
            raise web.HTTPNotFound(text=f"Champion '{champion_id}' not found.")
        return web.json_response(details)

    async def _items_handler(self, request: web.Request) -> web.Response:
        items = await self.items.fetch_all_items()
        result = filter_items(
            list(items.items()),
            search=request.query.get("search"),
            tags=request.query.getall("tag", []),
            price_min=_int_param(request, "min"),
            price_max=_int_param(request, "max"),
            purchasable_only=bool(_bool_param(request, "purchasable")),
        )
        result = sort_items(result, _sort_param(request, ITEM_SORTS, "popular"))
        return web.json_response([{"id": item_id, **item} for item_id, item in result])

    async def _skins_handler(self, request: web.Request) -> web.Response:
        skins = await self.skins.fetch_all_skins()
        result = filter_skins(
            skins,
            search=request.query.get("search"),
            prestige=bool(_bool_param(request, "prestige")),
            esports=bool(_bool_param(request, "esports")),
            chromas=_bool_param(request, "chromas"),
            price_min=_int_param(request, "min"),
            price_max=_int_param(request, "max"),
        )
        result = sort_skins(result, _sort_param(request, SKIN_SORTS, "name"))
        return web.json_response([skin.to_dict() for skin in result])

    async def _runes_handler(self, request: web.Request) -> web.Response:
        runes = await self.runes.fetch_all_runes()
        return web.json_response(filter_runes(
            runes,
            search=request.query.get("search"),
            keystone=bool(_bool_param(request, "keystone")),
        ))

    async def _emotes_handler(self, request: web.Request) -> web.Response:
        emotes = await self.emotes.fetch_all_emotes()
        return web.json_response(filter_emotes(
            emotes,
            search=request.query.get("search"),
            champion_id=_int_param(request, "champion"),
        ))

    async def _icons_handler(self, request: web.Request) -> web.Response:
        icons = await self.profile_icons.fetch_all_profile_icons()
        result = filter_profile_icons(
            list(icons.items()),
            search=request.query.get("search"),
            id_min=_int_param(request, "min"),
            id_max=_int_param(request, "max"),
        )
        result = sort_profile_icons(result, _sort_param(request, ICON_SORTS, "id-asc"))
        return web.json_response([icon for _, icon in result])

    async def _wards_handler(self, request: web.Request) -> web.Response:
        wards = await self.wards.fetch_all_ward_skins()
        result = filter_ward_skins(wards, search=request.query.get("search"))
        return web.json_response(sort_ward_skins(result, _sort_param(request, WARD_SORTS, "id")))

    async def _spells_handler(self, request: web.Request) -> web.Response:
        spells = await self.summoner_spells.fetch_all_summoner_spells()
        result = filter_summoner_spells(
            list(spells.items()),
            search=request.query.get("search"),
            mode=request.query.get("mode"),
        )
        result = sort_summoner_spells(result, _sort_param(request, SPELL_SORTS, "name"))
        return web.json_response([spell for _, spell in result])

    async def _challenges_handler(self, request: web.Request) -> web.Response:
        challenges = await self.challenges.fetch_all_challenges()
        return web.json_response(filter_challenges(challenges, search=request.query.get("search")))

    async def _cache_size_handler(self, request: web.Request) -> web.Response:
        return web.json_response({"size": self.cache.size()})

    async def _cache_clear_handler(self, request: web.Request) -> web.Response:
        self.cache.clear()
        return web.Response(status=204)

    async def _cache_remove_handler(self, request: web.Request) -> web.Response:
        self.cache.remove(request.match_info["key"])
        return web.Response(status=204)
