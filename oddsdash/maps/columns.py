# oddsdash/maps/columns.py
"""
Canonical game fields and the source headers they are read from.

Exports
-------
FIELD_ALIASES     : canonical camelCase name -> extra accepted source headers
HISTORY_FIELDS    : flat open/min/max/close fields (accepted as camel or Pascal)
NFL_WORKBOOK      : NFL workbook column -> (canonical name, kind)
ALIAS_LOOKUP      : source header -> canonical name (built once from the above)
"""
from __future__ import annotations

__all__ = ["FIELD_ALIASES", "TEXT_FIELDS", "HISTORY_FIELDS", "NFL_WORKBOOK", "ALIAS_LOOKUP", "canonical_name"]

# Canonical name and its PascalCase form are always accepted; list only the extras.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id":               ("ID",),
    "sport":            (),
    "season":           ("YEAR",),
    "week":             ("WEEK",),
    "startDate":        ("DATE", "Date", "Start Date"),
    "seasonType":       ("Season Type",),
    "homeTeam":         ("HomeTeam_x", "HomeTeam_y", "Home Team"),
    "awayTeam":         ("AwayTeam_x", "AwayTeam_y", "Away Team"),
    "homeConference":   ("HomeConf", "Home Conference"),
    "awayConference":   ("AwayConf", "Away Conference"),
    "homeScore":        ("HomeScoreFinal", "HomePoints", "Home Score"),
    "awayScore":        ("AwayScoreFinal", "AwayPoints", "Away Score"),
    "completed":        (),
    "lineProvider":     ("Book", "Sportsbook", "Provider"),
    "neutralVenue":     ("Neutral", "NeutralSite", "Neutral Venue?"),
    "playoffGame":      ("Playoff", "Playoff Game?"),
    "notes":            ("Comment",),
    "spread":           ("Line",),
    "openingSpread":    ("OpenLine",),
    "overUnder":        ("Total",),
    "openingOverUnder": ("OpenTotal",),
    "homeMoneyline":    ("HomeML",),
    "awayMoneyline":    ("AwayML",),
}

# Always kept as text, even when the cell looks numeric
TEXT_FIELDS: frozenset[str] = frozenset({
    "sport", "startDate", "seasonType",
    "homeTeam", "awayTeam", "homeConference", "awayConference",
    "lineProvider", "notes",
})

_HISTORY_PREFIXES = (
    "homeLine", "awayLine",
    "homeMoneyline", "awayMoneyline",
    "homeLineOdds", "awayLineOdds",
    "totalScore", "totalScoreOver", "totalScoreUnder",
)
HISTORY_FIELDS: tuple[str, ...] = tuple(
    f"{prefix}{part}" for prefix in _HISTORY_PREFIXES for part in ("Open", "Min", "Max", "Close")
)

# kind: "text" | "number" | "odds" (decimal odds, converted to American) | "flag" | "date"
NFL_WORKBOOK: dict[str, tuple[str, str]] = {
    "Date":                    ("startDate", "date"),
    "Home Team":               ("homeTeam", "text"),
    "Away Team":               ("awayTeam", "text"),
    "Home Score":              ("homeScore", "number"),
    "Away Score":              ("awayScore", "number"),
    "Playoff Game?":           ("playoffGame", "flag"),
    "Neutral Venue?":          ("neutralVenue", "flag"),
    "Notes":                   ("notes", "text"),
}
for _label, _prefix, _kind in (
    ("Home Line", "homeLine", "number"),
    ("Away Line", "awayLine", "number"),
    ("Total Score", "totalScore", "number"),
    ("Home Odds", "homeMoneyline", "odds"),
    ("Away Odds", "awayMoneyline", "odds"),
    ("Home Line Odds", "homeLineOdds", "odds"),
    ("Away Line Odds", "awayLineOdds", "odds"),
    ("Total Score Over", "totalScoreOver", "odds"),
    ("Total Score Under", "totalScoreUnder", "odds"),
):
    for _part in ("Open", "Min", "Max", "Close"):
        NFL_WORKBOOK[f"{_label} {_part}"] = (f"{_prefix}{_part}", _kind)


def _pascal(name: str) -> str:
    return name[:1].upper() + name[1:]


def _build_lookup() -> dict[str, str]:
    lookup: dict[str, str] = {}
    for canonical in (*FIELD_ALIASES, *HISTORY_FIELDS):
        for header in (canonical, _pascal(canonical), *FIELD_ALIASES.get(canonical, ())):
            # first claim wins
            lookup.setdefault(header, canonical)
    return lookup


ALIAS_LOOKUP: dict[str, str] = _build_lookup()


def canonical_name(header: str) -> str | None:
    return ALIAS_LOOKUP.get(header.strip())
