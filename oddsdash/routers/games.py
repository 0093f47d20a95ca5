# oddsdash/routers/games.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..core.config import get_settings
from ..deps import store_dep
from ..schemas.query import GamesQuery, StatsQuery, games_query, stats_query
from ..services.formatting import advanced_table, compose_renderers, games_table
from ..services.games import GameStore
from ..services.metrics import compute_metrics
from ..services.validation import validate_sport

router = APIRouter(prefix="/api", tags=["games"])


def _games(q: GamesQuery, store: GameStore):
    settings = get_settings()
    sport = validate_sport(q.sport, settings.default_sport)
    limit = q.limit if q.limit is not None else settings.default_limit
    return store.games(sport, q.season, q.conference, q.book, limit)


@router.get("/stats", summary="Dashboard summary for a sport/season")
def stats(q: StatsQuery = Depends(stats_query), store: GameStore = Depends(store_dep)):
    sport = validate_sport(q.sport, get_settings().default_sport)
    return {"success": True, "data": store.stats(sport, q.season) or {}}


@router.get("/games", summary="Canonical game records")
def games(q: GamesQuery = Depends(games_query), store: GameStore = Depends(store_dep)):
    data = _games(q, store)
    return {"success": True, "count": len(data), "data": data}


@router.get(
    "/metrics",
    summary="Games decorated with line movement, signals and best prices",
    description="Same filters as /api/games. Missing market values serialize as null.",
)
def metrics(q: GamesQuery = Depends(games_query), store: GameStore = Depends(store_dep)):
    decorated = compute_metrics(_games(q, store))
    return {"success": True, "count": len(decorated), "data": [m.to_wire() for m in decorated]}


@router.get(
    "/metrics/table",
    summary="Advanced odds table, one display string per cell",
    description="`rows` is the advanced table; `compactRows` the plain games table for the same games.",
)
def metrics_table(q: GamesQuery = Depends(games_query), store: GameStore = Depends(store_dep)):
    advanced, compact = advanced_table(), games_table()
    render = compose_renderers(advanced, compact)
    tables = render(compute_metrics(_games(q, store)))
    rows = tables[advanced.name]
    return {
        "success": True,
        "count": len(rows),
        "columns": advanced.columns,
        "rows": rows,
        "compactColumns": compact.columns,
        "compactRows": tables[compact.name],
    }
