# oddsdash/services/metrics.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Union

from pydantic.alias_generators import to_camel

from ..schemas.game import GameMetrics, GameRecord
from .history import attach_histories, extract_history
from .signals import detect_signals, volatility_score

GameInput = Union[GameRecord, Mapping[str, Any]]


def compute_game_metrics(game: GameInput) -> GameMetrics:
    """
    Decorate one game with market-movement analytics.

    The input is never mutated; every input field is carried over. Resolved
    open/min/max/close values replace the flat fields they were read from, and
    non-empty nested histories are attached.
    """
    if isinstance(game, GameRecord):
        record = game
    else:
        record = GameRecord.model_validate(dict(game) if isinstance(game, Mapping) else {})
    history = extract_history(record)
    report = detect_signals(history)

    spread, total = history.home_spread, history.total
    home_ml, away_ml = history.home_moneyline, history.away_moneyline

    derived: Dict[str, Any] = {
        **attach_histories(record, history),
        "line_move": report.line_move,
        "total_move": report.total_move,
        "spread_range": report.spread_range,
        "total_range": report.total_range,
        "clv": report.clv,
        "arb_profit": report.arb_profit,
        "signals": list(report.signals),
        "spread_open": spread.open,
        "spread_close": spread.close,
        "spread_min": spread.min,
        "spread_max": spread.max,
        "total_open": total.open,
        "total_close": total.close,
        "total_min": total.min,
        "total_max": total.max,
        "home_moneyline_open": home_ml.open,
        "home_moneyline_close": home_ml.close,
        "home_moneyline_min": home_ml.min,
        "home_moneyline_max": home_ml.max,
        "away_moneyline_open": away_ml.open,
        "away_moneyline_close": away_ml.close,
        "away_moneyline_min": away_ml.min,
        "away_moneyline_max": away_ml.max,
        "home_probability_shift": report.home_probability_shift,
        "away_probability_shift": report.away_probability_shift,
        "moneyline_steam": report.max_probability_shift,
        "spread_odds_open": history.home_spread_odds.open,
        "spread_odds_close": history.home_spread_odds.close,
        "total_over_open": history.total_over.open,
        "total_over_close": history.total_over.close,
        "total_under_open": history.total_under.open,
        "total_under_close": history.total_under.close,
        "best_home_moneyline": report.best_home.value,
        "best_home_moneyline_decimal": report.best_home.decimal,
        "best_away_moneyline": report.best_away.value,
        "best_away_moneyline_decimal": report.best_away.decimal,
        "volatility_score": volatility_score(report),
    }
    replaced = set(derived) | {to_camel(k) for k in derived}
    base = {k: v for k, v in record.model_dump().items() if k not in replaced}
    base.update(derived)
    return GameMetrics.model_validate(base)


def compute_metrics(games: Iterable[GameInput]) -> List[GameMetrics]:
    """N games in, N decorated games out, in order."""
    return [compute_game_metrics(g) for g in games]
