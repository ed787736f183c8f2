import os
from aiohttp import web
from dotenv import load_dotenv

from data_cache import DataCache
from server import Server, TRUTHY


def main():
    load_dotenv()
    # One cache for the whole process, shared by every data service
    cache = DataCache()
    server = Server(
        cache,
        skins_path=os.getenv("SKINS_DATA_PATH", "data/skins_all.json"),
        warm_cache=os.getenv("WARM_CACHE", "1").strip().lower() in TRUTHY,
    )
    web.run_app(server, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8080")))

if __name__ == "__main__":
    main()
