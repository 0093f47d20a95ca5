import json

import httpx
import pytest

from oddsdash.clients.supabase import SupabaseClient, SupabaseError
from oddsdash.core.cache import SharedCache
from oddsdash.providers.files import LocalFileProvider
from oddsdash.providers.mock import DemoProvider
from oddsdash.services.games import GameStore, filter_games, games_cache_key

from conftest import NCAAF_GAMES, make_settings, write_json


def _supabase(handler):
    return SupabaseClient("https://db.example.supabase.co/", "service-key", transport=httpx.MockTransport(handler))


def test_cache_key_format():
    assert games_cache_key("NCAAF", None, None, None, 500) == "games:NCAAF:all:all:all:500"
    assert games_cache_key("NFL", 2023, "AFC West", "Bovada", 10) == "games:NFL:2023:AFC West:Bovada:10"


def test_filter_games():
    assert [g["id"] for g in filter_games(NCAAF_GAMES, season=2023)] == [1, 2]
    assert [g["id"] for g in filter_games(NCAAF_GAMES, conference="big ten")] == [3]
    assert [g["id"] for g in filter_games(NCAAF_GAMES, book="BOVADA")] == [1, 3]
    assert [g["id"] for g in filter_games(NCAAF_GAMES, limit=1)] == [1]


# ---------- database tier ----------
def test_database_rpc(tmp_path):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "db-1", "homeTeam": "Navy"}])

    store = GameStore(make_settings(tmp_path), cache=SharedCache(None), database=_supabase(handler))
    games = store.games("NCAAF", 2023, "AAC", None, 25)
    assert games == [{"id": "db-1", "homeTeam": "Navy"}]

    req = seen[0]
    assert req.url.path == "/rest/v1/rpc/get_games_for_dashboard"
    assert req.headers["apikey"] == "service-key"
    assert req.headers["authorization"] == "Bearer service-key"
    assert json.loads(req.content) == {
        "p_sport": "NCAAF", "p_season": 2023, "p_conference": "AAC", "p_sportsbook": None, "p_limit": 25,
    }

    # cached for the validity window
    store.games("NCAAF", 2023, "AAC", None, 25)
    assert len(seen) == 1


def test_database_failure_falls_back_to_local_file(data_dir):
    def handler(request):
        return httpx.Response(500, text="function does not exist")

    store = GameStore(make_settings(data_dir), cache=SharedCache(None), database=_supabase(handler))
    games = store.games("NCAAF", None, "SEC", "bovada", 500)
    assert [g["id"] for g in games] == [1, 3]


def test_supabase_error_carries_status():
    client = _supabase(lambda request: httpx.Response(400, text="bad params"))
    with pytest.raises(SupabaseError, match="400"):
        client.games_for_dashboard("NFL")


def test_dashboard_stats_unwraps_single_row():
    client = _supabase(lambda request: httpx.Response(200, json=[{"totalGames": 10}]))
    assert client.dashboard_stats("NFL", 2023) == {"totalGames": 10}


# ---------- file / demo tiers ----------
def test_local_file(store):
    games = store.games("NCAAF", limit=2)
    assert [g["id"] for g in games] == [1, 2]


def test_season_file_preferred(data_dir, store):
    write_json(data_dir / "season-2024.json", [{"id": 99, "season": 2024, "homeTeam": "Texas"}])
    assert [g["id"] for g in store.games("NCAAF", 2024)] == [99]


def test_demo_when_no_file(store):
    games = store.games("NFL", limit=5)
    assert len(games) == 5
    assert all(g["sport"] == "NFL" for g in games)


def test_nothing_when_demo_disabled(tmp_path):
    settings = make_settings(tmp_path, demo_fallback=False)
    store = GameStore(settings, cache=SharedCache(None))
    assert store.demo is None
    assert store.games("NFL") == []


def test_unreadable_file_falls_through_to_demo(tmp_path):
    (tmp_path / "nfl-games.json").write_text("{not json", encoding="utf-8")
    store = GameStore(make_settings(tmp_path), cache=SharedCache(None),
                      files=LocalFileProvider(tmp_path), demo=DemoProvider())
    assert len(store.games("NFL")) == 12


# ---------- stats ----------
def test_stats_from_local_games(store):
    stats = store.stats("NCAAF", 2023)
    assert stats["totalGames"] == 2
    assert stats["conferences"] == ["ACC", "SEC"]


def test_stats_from_database(tmp_path):
    def handler(request):
        assert request.url.path == "/rest/v1/rpc/get_dashboard_stats"
        return httpx.Response(200, json={"totalGames": 1234})

    store = GameStore(make_settings(tmp_path), cache=SharedCache(None), database=_supabase(handler))
    assert store.stats("NFL") == {"totalGames": 1234}
