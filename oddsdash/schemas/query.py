from __future__ import annotations
from typing import Optional
from fastapi import Query
from pydantic import BaseModel, Field, ConfigDict

MAX_LIMIT = 5000


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")  # reject unknown fields


class StatsQuery(_Strict):
    sport: Optional[str] = None
    season: Optional[int] = None


class GamesQuery(StatsQuery):
    conference: Optional[str] = None
    book: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1, le=MAX_LIMIT)   # None -> settings.default_limit


def stats_query(
    sport: Optional[str] = Query(None, description="NCAAF | NFL (case-insensitive)"),
    season: Optional[int] = Query(None, description="Season year", examples=[2024]),
) -> StatsQuery:
    return StatsQuery(sport=sport, season=season)


def games_query(
    sport: Optional[str] = Query(None, description="NCAAF | NFL (case-insensitive)"),
    season: Optional[int] = Query(None, description="Season year", examples=[2024]),
    conference: Optional[str] = Query(None, description="Home or away conference, e.g. SEC"),
    book: Optional[str] = Query(None, description="Sportsbook (line provider)"),
    limit: Optional[int] = Query(None, ge=1, le=MAX_LIMIT, description="Max games returned (default 500)"),
) -> GamesQuery:
    return GamesQuery(sport=sport, season=season, conference=conference, book=book, limit=limit)
