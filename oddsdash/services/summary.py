from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping


def _pct(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def summarize_games(games: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Dashboard summary for a set of canonical games:
    seasons, sportsbooks, conferences and odds/score coverage.
    """
    rows: List[Mapping[str, Any]] = list(games)
    n = len(rows)
    seasons = sorted({g["season"] for g in rows if g.get("season")})
    books = sorted({str(g["lineProvider"]) for g in rows if g.get("lineProvider")})
    conferences = sorted({
        str(c) for g in rows for c in (g.get("homeConference"), g.get("awayConference")) if c
    })
    with_spreads = sum(1 for g in rows if g.get("spread") is not None)
    with_totals = sum(1 for g in rows if g.get("overUnder") is not None)
    with_scores = sum(1 for g in rows if g.get("homeScore") is not None and g.get("awayScore") is not None)
    return {
        "totalGames": n,
        "completedGames": sum(1 for g in rows if g.get("completed")),
        "seasons": seasons,
        "sportsbooks": books,
        "conferences": conferences,
        "withSpreads": with_spreads,
        "withTotals": with_totals,
        "withScores": with_scores,
        "spreadCoverage": _pct(with_spreads, n),
        "totalCoverage": _pct(with_totals, n),
        "scoreCoverage": _pct(with_scores, n),
    }
