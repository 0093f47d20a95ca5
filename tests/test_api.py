import pytest
from httpx import ASGITransport, AsyncClient

from oddsdash.deps import get_game_store
from oddsdash.main import app


@pytest.fixture
def api(store):
    app.dependency_overrides[get_game_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


def _client(app_, **kwargs):
    return AsyncClient(transport=ASGITransport(app=app_, **kwargs), base_url="http://test")


@pytest.mark.asyncio
async def test_games(api):
    async with _client(api) as ac:
        r = await ac.get("/api/games", params={"sport": "ncaaf", "season": 2023})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [g["id"] for g in body["data"]] == [1, 2]


@pytest.mark.asyncio
async def test_games_filters(api):
    async with _client(api) as ac:
        r = await ac.get("/api/games", params={"conference": "SEC", "book": "BOVADA", "limit": 1})
    assert r.json()["count"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"sport": "MLB"}, {"limit": 0}, {"limit": 5001}, {"season": "abc"}])
async def test_bad_query_is_422(api, params):
    async with _client(api) as ac:
        r = await ac.get("/api/games", params=params)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_stats(api):
    async with _client(api) as ac:
        r = await ac.get("/api/stats", params={"sport": "NCAAF"})
    body = r.json()
    assert body["success"] is True
    assert body["data"]["totalGames"] == 3


@pytest.mark.asyncio
async def test_metrics(api):
    async with _client(api) as ac:
        r = await ac.get("/api/metrics", params={"season": 2023})
    body = r.json()
    assert body["count"] == 2
    first = body["data"][0]
    assert first["lineMove"] == -3.5
    assert first["clv"] == 3.5
    assert first["signals"] == ["SPREAD STEAM", "TOTAL STEAM"]
    assert first["arbProfit"] is None
    assert first["spreadHistory"]["home"]["open"] == -10.5
    second = body["data"][1]
    assert second["lineMove"] is None
    assert second["volatilityScore"] == 0.0


@pytest.mark.asyncio
async def test_metrics_table(api):
    async with _client(api) as ac:
        r = await ac.get("/api/metrics/table", params={"limit": 3})
    body = r.json()
    assert body["count"] == 3
    assert body["columns"][0] == "season"
    assert body["rows"][0]["matchup"].startswith("Auburn @ Georgia")
    assert body["compactColumns"] == ["date", "matchup", "spread", "total", "moneyline"]
    assert len(body["compactRows"]) == len(body["rows"])
    assert body["compactRows"][0]["spread"] == "-14.0"


@pytest.mark.asyncio
async def test_unexpected_error_is_500_json():
    class Broken:
        def games(self, *args, **kwargs):
            raise RuntimeError("boom")

    app.dependency_overrides[get_game_store] = lambda: Broken()
    try:
        async with _client(app, raise_app_exceptions=False) as ac:
            r = await ac.get("/api/games")
    finally:
        app.dependency_overrides.clear()
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": "boom"}


@pytest.mark.asyncio
async def test_games_default_limit_from_settings(api, tmp_path, monkeypatch):
    import oddsdash.routers.games as games_router
    from conftest import make_settings

    monkeypatch.setattr(games_router, "get_settings", lambda: make_settings(tmp_path, default_limit=1))
    async with _client(api) as ac:
        r = await ac.get("/api/games")
        explicit = await ac.get("/api/games", params={"limit": 2})
    assert r.json()["count"] == 1
    assert explicit.json()["count"] == 2
