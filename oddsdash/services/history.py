# oddsdash/services/history.py
from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional

from ..domain.models import MarketHistory, MarketQuote, SidedQuote
from ..schemas.game import GameRecord

_FIELDS = ("open", "min", "max", "close")


class Channel(NamedTuple):
    """Where one market channel's open/min/max/close may live on a record."""
    nested: str                   # history attribute on GameRecord
    side: Optional[str]           # "home" | "away" | None for single-sided markets
    flat: str                     # flat field prefix, e.g. "home_line" -> home_line_open
    scalar_open: Optional[str] = None
    scalar_close: Optional[str] = None


# Lookup order per field: nested history -> flat field -> scalar (open/close only)
CHANNELS: Dict[str, Channel] = {
    "home_spread":      Channel("spread_history", "home", "home_line", "opening_spread", "spread"),
    "away_spread":      Channel("spread_history", "away", "away_line"),
    "home_moneyline":   Channel("moneyline_history", "home", "home_moneyline", None, "home_moneyline"),
    "away_moneyline":   Channel("moneyline_history", "away", "away_moneyline", None, "away_moneyline"),
    "total":            Channel("total_history", None, "total_score", "opening_over_under", "over_under"),
    "total_over":       Channel("total_over_odds_history", None, "total_score_over"),
    "total_under":      Channel("total_under_odds_history", None, "total_score_under"),
    "home_spread_odds": Channel("spread_odds_history", "home", "home_line_odds"),
    "away_spread_odds": Channel("spread_odds_history", "away", "away_line_odds"),
}

# Sided histories and the channels that feed them (home first)
_SIDED = {
    "spread_history": ("home_spread", "away_spread"),
    "moneyline_history": ("home_moneyline", "away_moneyline"),
    "spread_odds_history": ("home_spread_odds", "away_spread_odds"),
}
_SINGLE = {
    "total_history": "total",
    "total_over_odds_history": "total_over",
    "total_under_odds_history": "total_under",
}


# -------------------------------
# Public API
# -------------------------------
def resolve_quote(game: GameRecord, channel: Channel) -> MarketQuote:
    nested = _nested_quote(game, channel)
    values: Dict[str, Optional[float]] = {}
    for field in _FIELDS:
        value = getattr(nested, field) if nested is not None else None
        if value is None:
            value = getattr(game, f"{channel.flat}_{field}", None)
        if value is None:
            scalar = channel.scalar_open if field == "open" else channel.scalar_close if field == "close" else None
            if scalar:
                value = getattr(game, scalar, None)
        values[field] = value
    return MarketQuote(**values)


def extract_history(game: GameRecord) -> MarketHistory:
    """Resolve every market channel of a game into a MarketHistory."""
    return MarketHistory(**{name: resolve_quote(game, ch) for name, ch in CHANNELS.items()})


def attach_histories(game: GameRecord, history: Optional[MarketHistory] = None) -> Dict[str, Any]:
    """
    Nested history objects for a record, built from the resolved channels.

    A history is included only when it carries at least one value, so
    records without odds do not grow all-null placeholder objects.
    """
    if history is None:
        history = extract_history(game)
    out: Dict[str, Any] = {}
    for attr, (home, away) in _SIDED.items():
        sided = SidedQuote(
            home=_present(getattr(history, home)),
            away=_present(getattr(history, away)),
        )
        if sided.has_values():
            out[attr] = sided
    for attr, name in _SINGLE.items():
        quote = _present(getattr(history, name))
        if quote is not None:
            out[attr] = quote
    return out


# -------------------------------
# Internals
# -------------------------------
def _nested_quote(game: GameRecord, channel: Channel) -> Optional[MarketQuote]:
    nested = getattr(game, channel.nested, None)
    if nested is None:
        return None
    if channel.side is None:
        return nested
    return getattr(nested, channel.side, None)


def _present(quote: MarketQuote) -> Optional[MarketQuote]:
    return quote if quote.has_values() else None


__all__ = ["CHANNELS", "Channel", "resolve_quote", "extract_history", "attach_histories"]
