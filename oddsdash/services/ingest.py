# oddsdash/services/ingest.py
"""
CSV / XLSX ingestion into canonical game records.

Every source header goes through the single mapping table in
``maps.columns`` here, at the boundary, so downstream code (store, engine,
routes) only ever sees canonical camelCase field names.
"""
from __future__ import annotations

import json
import logging
import math
import re
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from ..domain.values import clean_string, to_boolean, to_number
from ..maps.columns import NFL_WORKBOOK, TEXT_FIELDS, canonical_name
from ..maps.nfl import NFL_DIVISIONS
from .odds import decimal_to_american

logger = logging.getLogger(__name__)

_NULL_TEXT = {"", "null", "NULL", "undefined"}


# -------------------------------
# Value parsing
# -------------------------------
def parse_value(value: Any) -> Any:
    """
    Text cell -> typed value.

      "" / null / NULL / undefined -> None
      True/true, False/false       -> bool
      finite numeric text          -> int or float
      anything else                -> stripped string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value
    text = value.strip().replace('"', "")
    if text in _NULL_TEXT:
        return None
    if text in ("True", "true"):
        return True
    if text in ("False", "false"):
        return False
    try:
        return int(text)
    except ValueError:
        pass
    try:
        num = float(text)
    except ValueError:
        return text
    return num if math.isfinite(num) else None


def normalize_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Map one source row onto canonical field names; unknown headers are dropped."""
    out: Dict[str, Any] = {}
    for header, raw in row.items():
        canonical = canonical_name(str(header))
        if canonical is None:
            continue
        value = parse_value(raw)
        if value is not None and canonical in TEXT_FIELDS:
            # "888" is a sportsbook, not a number
            value = clean_string(str(raw).replace('"', ""))
        # first non-null source wins (e.g. HomeTeam_x before HomeTeam_y)
        if out.get(canonical) is None:
            out[canonical] = value
    return out


# -------------------------------
# CSV
# -------------------------------
def read_games_csv(path: Path | str, sport: Optional[str] = None) -> List[Dict[str, Any]]:
    """Read a long-format games CSV; rows without an id or home team are skipped."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    logger.info("read %d rows from %s", len(df), path)
    games: List[Dict[str, Any]] = []
    for row in df.to_dict(orient="records"):
        game = normalize_row(row)
        if game.get("id") is None or game.get("homeTeam") is None:
            continue
        if sport and game.get("sport") is None:
            game["sport"] = sport
        games.append(game)
    logger.info("normalized %d games", len(games))
    return games


# -------------------------------
# NFL workbook
# -------------------------------
def read_nfl_workbook(path: Path | str) -> List[Dict[str, Any]]:
    """Read the first sheet of the NFL odds workbook and normalize it."""
    df = pd.read_excel(path, sheet_name=0, dtype=object)
    df = df.astype(object).where(df.notna(), None)
    rows = df.to_dict(orient="records")
    logger.info("read %d NFL rows from %s", len(rows), path)
    return normalize_nfl_rows(rows)


def normalize_nfl_rows(rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Workbook rows -> canonical NFL games.

    Season is the calendar year, minus one for January to March kickoffs.
    Weeks are numbered 1..n per season from the distinct Monday-anchored
    weeks that contain games. Decimal odds become American odds.
    """
    prepared = []
    for row in rows:
        kickoff = parse_date(row.get("Date"))
        home = clean_string(row.get("Home Team"))
        away = clean_string(row.get("Away Team"))
        if kickoff is None or home is None or away is None:
            continue
        prepared.append((row, kickoff, nfl_season(kickoff), week_key(kickoff)))

    weeks_by_season: Dict[int, set] = defaultdict(set)
    for _, _, season, wk in prepared:
        weeks_by_season[season].add(wk)
    week_lookup = {
        (season, wk): i + 1
        for season, weeks in weeks_by_season.items()
        for i, wk in enumerate(sorted(weeks))
    }

    games = []
    for row, kickoff, season, wk in prepared:
        week = week_lookup.get((season, wk))
        game = _map_workbook_row(row)
        home, away = game["homeTeam"], game["awayTeam"]
        home_score, away_score = game.get("homeScore"), game.get("awayScore")
        playoff = bool(game.get("playoffGame"))
        game.update({
            "id": clean_string(row.get("Id")) or (
                f"{season}-{str(week or '').zfill(2)}-{slugify(home)}-{slugify(away)}-{kickoff.date().isoformat()}"
            ),
            "sport": "NFL",
            "season": season,
            "week": week,
            "startDate": _iso(kickoff),
            "homeConference": NFL_DIVISIONS.get(home),
            "awayConference": NFL_DIVISIONS.get(away),
            "spread": game.get("homeLineClose"),
            "overUnder": game.get("totalScoreClose"),
            "openingSpread": game.get("homeLineOpen"),
            "openingOverUnder": game.get("totalScoreOpen"),
            "homeMoneyline": game.get("homeMoneylineClose"),
            "awayMoneyline": game.get("awayMoneylineClose"),
            "seasonType": "Postseason" if playoff else "Regular",
            "completed": home_score is not None and away_score is not None,
            "lineProvider": "Consensus",
            "neutralVenue": bool(game.get("neutralVenue")) or None,
            "playoffGame": playoff or None,
        })
        games.append(game)
    return games


def _map_workbook_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for column, (canonical, kind) in NFL_WORKBOOK.items():
        raw = row.get(column)
        if kind == "number":
            out[canonical] = _to_int_if_whole(to_number(raw))
        elif kind == "odds":
            out[canonical] = decimal_to_american(raw)
        elif kind == "flag":
            out[canonical] = bool(to_boolean(raw))
        elif kind == "date":
            continue
        else:
            out[canonical] = clean_string(raw)
    return out


# -------------------------------
# Date helpers
# -------------------------------
_EXCEL_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)


def parse_date(value: Any) -> Optional[datetime]:
    """Cell -> aware UTC datetime; Excel serial numbers are accepted."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        serial = to_number(value)
        if serial is None:
            return None
        try:
            return _EXCEL_EPOCH + timedelta(days=int(serial))
        except OverflowError:
            return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    ts = pd.to_datetime(str(value).strip(), errors="coerce", utc=True)
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def nfl_season(kickoff: datetime) -> int:
    return kickoff.year - 1 if kickoff.month <= 3 else kickoff.year


def week_key(kickoff: datetime) -> str:
    """ISO date of the Monday starting the kickoff's week."""
    day = kickoff.date()
    return (day - timedelta(days=day.weekday())).isoformat()


def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


# -------------------------------
# Output
# -------------------------------
def slugify(value: Any) -> str:
    return re.sub(r"[^a-z0-9]+", "-", str(value or "").strip().lower()).strip("-")


def split_by_season(games: Iterable[Mapping[str, Any]]) -> Dict[int, List[Mapping[str, Any]]]:
    out: Dict[int, List[Mapping[str, Any]]] = defaultdict(list)
    for g in games:
        season = g.get("season")
        if season:
            out[int(season)].append(g)
    return dict(sorted(out.items()))


def write_games(games: List[Mapping[str, Any]], path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(games, f, indent=1, allow_nan=False, default=str)
    logger.info("wrote %d games -> %s (%.2f MB)", len(games), path, path.stat().st_size / 1024 / 1024)
    return path


def _to_int_if_whole(num: Optional[float]) -> Any:
    if num is not None and num.is_integer():
        return int(num)
    return num
