import asyncio
import json
import os

import pytest

from skins_api import Skin, SkinsApi, SkinsDataError, filter_skins, parse_skin, skin_splash_art, sort_skins

RAW_SKINS = [
    {"skin_id": "1001", "skin_num": 1, "skin_name": "Goth Annie", "champion": "Annie", "champion_id": "1",
     "chromas": False, "price": 520, "release_date": "2009-02-21"},
    {"skin_id": "103015", "skin_num": 15, "skin_name": "Spirit Blossom Ahri", "champion": "Ahri",
     "champion_id": "103", "chromas": True, "price": 1350, "release_date": "2020-07-08"},
    {"skin_id": "103027", "skin_num": 27, "skin_name": "Prestige K/DA Ahri", "champion": "Ahri",
     "champion_id": "103", "chromas": False, "price": "Special", "release_date": "2021-11-04",
     "isPrestige": True},
    {"skin_id": "222030", "skin_num": 30, "skin_name": "Worlds 2023 Jinx", "champion": "Jinx",
     "champion_id": "222", "chromas": False, "price": 1350, "release_date": "2023-10-10", "isEsports": True},
]


@pytest.fixture
def skins():
    return [parse_skin(raw) for raw in RAW_SKINS]


def test_parse_skin_uses_champion_id_for_images():
    skin = parse_skin(RAW_SKINS[1])
    assert skin.id == 103015
    assert skin.champion_id == 103
    assert skin.distribution == "Standard"
    assert skin_splash_art(skin.champion_id, skin.num) == \
        "https://cdn.communitydragon.org/latest/champion/103/splash-art/skin/15"


def test_distribution(skins):
    assert [s.distribution for s in skins] == ["Standard", "Standard", "Prestige", "Esports"]


def test_fetch_all_skins_reads_file_once(cache, tmp_path):
    path = tmp_path / "skins_all.json"
    path.write_text(json.dumps(RAW_SKINS), encoding="utf-8")
    api = SkinsApi(cache, str(path))

    async def run():
        first = await api.fetch_all_skins()
        os.remove(path)
        return first, await api.fetch_all_skins()

    first, second = asyncio.run(run())
    assert len(first) == 4
    assert all(isinstance(s, Skin) for s in first)
    assert second is first


def test_missing_file_is_not_cached(cache, tmp_path):
    api = SkinsApi(cache, str(tmp_path / "missing.json"))
    with pytest.raises(SkinsDataError) as excinfo:
        asyncio.run(api.fetch_all_skins())
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert cache.size() == 0


def test_malformed_file_is_not_cached(cache, tmp_path):
    path = tmp_path / "skins_all.json"
    path.write_text("[{not json", encoding="utf-8")
    api = SkinsApi(cache, str(path))
    with pytest.raises(SkinsDataError):
        asyncio.run(api.fetch_all_skins())
    assert cache.size() == 0


def test_filter_skins(skins):
    assert [s.num for s in filter_skins(skins, search="ahri")] == [15, 27]
    assert [s.num for s in filter_skins(skins, prestige=True)] == [27]
    assert [s.num for s in filter_skins(skins, esports=True)] == [30]
    assert [s.num for s in filter_skins(skins, chromas=True)] == [15]
    assert [s.num for s in filter_skins(skins, chromas=False)] == [1, 27, 30]
    # "Special" counts as 0
    assert [s.num for s in filter_skins(skins, price_max=600)] == [1, 27]
    assert [s.num for s in filter_skins(skins, price_min=1000)] == [15, 30]


def test_sort_skins(skins):
    assert [s.num for s in sort_skins(skins, "name")] == [1, 27, 15, 30]
    assert [s.num for s in sort_skins(skins, "date")] == [30, 27, 15, 1]
    assert [s.num for s in sort_skins(skins, "price")][-1] == 27
