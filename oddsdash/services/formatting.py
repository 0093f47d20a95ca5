# oddsdash/services/formatting.py
from __future__ import annotations

import math
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..schemas.game import GameMetrics

MISSING = "—"

# -------------------------------
# Scalar formatters
# -------------------------------
def _finite(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return num if math.isfinite(num) else None


def format_odds(ml: Any) -> str:
    """-110 -> "-110", 150 -> "+150", missing -> "—"."""
    value = _finite(ml)
    if value is None:
        return MISSING
    rounded = int(math.floor(value + 0.5))
    return f"+{rounded}" if rounded > 0 else f"{rounded}"


def format_odds_with_decimal(ml: Any, decimal_odds: Any) -> str:
    odds = format_odds(ml)
    if odds == MISSING:
        return MISSING
    dec = _finite(decimal_odds)
    if dec is None:
        return odds
    return f"{odds} ({dec:.2f}x)"


def format_number(value: Any, digits: int = 1) -> str:
    num = _finite(value)
    return MISSING if num is None else f"{num:.{digits}f}"


def format_signed(value: Any, digits: int = 1) -> str:
    num = _finite(value)
    if num is None:
        return ""
    fixed = f"{num:.{digits}f}"
    return f"+{fixed}" if num > 0 else fixed


def format_range(lo: Any, hi: Any, digits: int = 1) -> str:
    a, b = _finite(lo), _finite(hi)
    if a is None or b is None:
        return MISSING
    return f"{a:.{digits}f} to {b:.{digits}f}"


def format_prob_shift(value: Any) -> str:
    num = _finite(value)
    if num is None or num == 0:
        return ""
    sign = "+" if num > 0 else ""
    return f" ({sign}{num:.1f} pp)"


# -------------------------------
# Cell formatters (one game -> display text)
# -------------------------------
def format_matchup(game: GameMetrics) -> str:
    lines = [f"{game.away_team or MISSING} @ {game.home_team or MISSING}"]
    if game.away_score is not None and game.home_score is not None:
        lines.append(f"Final {game.away_score}-{game.home_score}")
    tags = [
        game.line_provider,
        game.season_type,
        "Playoff" if game.playoff_game else None,
        "Neutral site" if game.neutral_venue else None,
    ]
    tag_line = " | ".join(t for t in tags if t)
    if tag_line:
        lines.append(tag_line)
    if game.notes:
        lines.append(game.notes)
    return "\n".join(lines)


def format_spread_summary(game: GameMetrics) -> str:
    delta = format_signed(game.line_move, 1)
    delta_section = f" (delta {delta})" if delta else ""
    return "\n".join([
        f"Open {format_number(game.spread_open)} @ {format_odds(game.spread_odds_open)}",
        f"Close {format_number(game.spread_close)}{delta_section} @ {format_odds(game.spread_odds_close)}",
        f"Range {format_range(game.spread_min, game.spread_max)}",
    ])


def _moneyline_rows(label: str, open_: Any, close: Any, lo: Any, hi: Any,
                    shift: Any, best: Any, best_decimal: Any) -> List[str]:
    o, c = _finite(open_), _finite(close)
    delta = format_signed(c - o, 0) if o is not None and c is not None else ""
    delta_section = f" (delta {delta})" if delta else ""
    best_text = format_odds_with_decimal(best, best_decimal)
    best_section = f" | Best {best_text}" if best_text != MISSING else ""
    return [
        f"{label}: {format_odds(open_)} -> {format_odds(close)}{delta_section}{format_prob_shift(shift)}",
        f"Range {format_range(lo, hi, 0)}{best_section}",
    ]


def format_moneyline_summary(game: GameMetrics) -> str:
    return "\n".join(
        _moneyline_rows(
            game.home_team or "Home",
            game.home_moneyline_open, game.home_moneyline_close,
            game.home_moneyline_min, game.home_moneyline_max,
            game.home_probability_shift,
            game.best_home_moneyline, game.best_home_moneyline_decimal,
        )
        + _moneyline_rows(
            game.away_team or "Away",
            game.away_moneyline_open, game.away_moneyline_close,
            game.away_moneyline_min, game.away_moneyline_max,
            game.away_probability_shift,
            game.best_away_moneyline, game.best_away_moneyline_decimal,
        )
    )


def format_total_summary(game: GameMetrics) -> str:
    delta = format_signed(game.total_move, 1)
    delta_section = f" (delta {delta})" if delta else ""
    over = f"{format_odds(game.total_over_open)} -> {format_odds(game.total_over_close)}"
    under = f"{format_odds(game.total_under_open)} -> {format_odds(game.total_under_close)}"
    return "\n".join([
        f"Total {format_number(game.total_open)} -> {format_number(game.total_close)}{delta_section}",
        f"Range {format_range(game.total_min, game.total_max)}",
        f"Over {over} | Under {under}",
    ])


def format_signals(signals: Optional[Sequence[str]]) -> str:
    if not signals:
        return MISSING
    return " ".join(f"[{s}]" for s in signals)


def format_edge_summary(game: GameMetrics) -> str:
    clv = format_signed(game.clv, 1) if _finite(game.clv) is not None else MISSING
    arb = f"{game.arb_profit:.2f}%" if _finite(game.arb_profit) is not None else MISSING
    ml_shift = f"{game.moneyline_steam:.1f} pp"
    return "\n".join([
        f"CLV {clv}",
        f"Arb {arb}",
        f"ML shift {ml_shift}",
        f"Volatility {game.volatility_score:.1f}",
    ])


def _start_day(game: GameMetrics) -> str:
    return (game.start_date or "").split("T")[0] or MISSING


# -------------------------------
# Rendering
# -------------------------------
CellHandler = Callable[[GameMetrics], str]


class TableRenderer:
    """Ordered (column, handler) pairs; each row is rendered left to right."""

    def __init__(self, name: str, columns: Iterable[Tuple[str, CellHandler]] = ()):
        self.name = name
        self._columns: List[Tuple[str, CellHandler]] = list(columns)

    @property
    def columns(self) -> List[str]:
        return [c for c, _ in self._columns]

    def add(self, column: str, handler: CellHandler) -> "TableRenderer":
        self._columns.append((column, handler))
        return self

    def render_row(self, game: GameMetrics) -> Dict[str, str]:
        return {column: handler(game) for column, handler in self._columns}

    def render(self, games: Iterable[GameMetrics]) -> List[Dict[str, str]]:
        return [self.render_row(g) for g in games]


def compose_renderers(*renderers: TableRenderer) -> Callable[[List[GameMetrics]], Dict[str, List[Dict[str, str]]]]:
    """One renderer call that runs every table renderer in order."""
    def render_all(games: List[GameMetrics]) -> Dict[str, List[Dict[str, str]]]:
        return {r.name: r.render(games) for r in renderers}
    return render_all


def advanced_table() -> TableRenderer:
    return TableRenderer("advanced", [
        ("season", lambda g: str(g.season) if g.season is not None else MISSING),
        ("week", lambda g: str(g.week) if g.week is not None else MISSING),
        ("date", _start_day),
        ("matchup", format_matchup),
        ("spread", format_spread_summary),
        ("moneyline", format_moneyline_summary),
        ("total", format_total_summary),
        ("signals", lambda g: format_signals(g.signals)),
        ("edge", format_edge_summary),
    ])


def games_table() -> TableRenderer:
    return TableRenderer("games", [
        ("date", _start_day),
        ("matchup", format_matchup),
        ("spread", lambda g: format_number(g.spread)),
        ("total", lambda g: format_number(g.over_under)),
        ("moneyline", lambda g: f"{format_odds(g.home_moneyline)} / {format_odds(g.away_moneyline)}"),
    ])
