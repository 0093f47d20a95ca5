# oddsdash/services/signals.py
from __future__ import annotations

import math
from typing import List, Optional

from ..domain.models import (
    ARB, ML_STEAM, REVERSE, SPREAD_STEAM, TOTAL_STEAM,
    MarketHistory, Signal, SignalReport,
)
from .odds import implied_probability, select_best_price

# Inclusive thresholds; spread and total steam use different values.
SPREAD_STEAM_POINTS = 2.5
TOTAL_STEAM_POINTS = 2.0
ML_STEAM_PP = 5.0


# -------------------------------
# Public API
# -------------------------------
def detect_signals(history: MarketHistory) -> SignalReport:
    """
    Movement deltas and signal tags for one game.

    Signals are appended in a fixed order: SPREAD STEAM, REVERSE,
    TOTAL STEAM, ML STEAM, ARB. Missing inputs null the affected deltas and
    suppress the signals that depend on them; nothing raises.
    """
    spread = history.home_spread
    total = history.total
    home_ml = history.home_moneyline
    away_ml = history.away_moneyline

    signals: List[Signal] = []

    line_move = _delta(spread.close, spread.open)
    if line_move is not None and abs(line_move) >= SPREAD_STEAM_POINTS:
        signals.append(SPREAD_STEAM)

    reverse = is_reverse_move(spread.open, spread.close)
    if reverse:
        signals.append(REVERSE)

    total_move = _delta(total.close, total.open)
    if total_move is not None and abs(total_move) >= TOTAL_STEAM_POINTS:
        signals.append(TOTAL_STEAM)

    home_shift = probability_shift(home_ml.open, home_ml.close)
    away_shift = probability_shift(away_ml.open, away_ml.close)
    max_shift = max(abs(home_shift or 0.0), abs(away_shift or 0.0))
    if max_shift >= ML_STEAM_PP:
        signals.append(ML_STEAM)

    best_home = select_best_price([home_ml.open, home_ml.close, home_ml.min, home_ml.max])
    best_away = select_best_price([away_ml.open, away_ml.close, away_ml.min, away_ml.max])
    arb_profit = arbitrage_margin(best_home.decimal, best_away.decimal)
    if arb_profit is not None:
        signals.append(ARB)

    return SignalReport(
        line_move=line_move,
        total_move=total_move,
        spread_range=_delta(spread.max, spread.min),
        total_range=_delta(total.max, total.min),
        clv=_negate(line_move),
        reverse=reverse,
        home_probability_shift=home_shift,
        away_probability_shift=away_shift,
        max_probability_shift=max_shift,
        best_home=best_home,
        best_away=best_away,
        arb_profit=arb_profit,
        signals=signals,
    )


def is_reverse_move(spread_open: Optional[float], spread_close: Optional[float]) -> bool:
    """
    Favorite's number shrinking toward zero (open < 0, close > open) or the
    underdog's number shortening (open > 0, close < open). Only the sign of
    the opening line is considered.
    """
    if spread_open is None or spread_close is None:
        return False
    if spread_open < 0 and spread_close > spread_open:
        return True
    if spread_open > 0 and spread_close < spread_open:
        return True
    return False


def probability_shift(ml_open: Optional[float], ml_close: Optional[float]) -> Optional[float]:
    """Implied probability change open -> close, in percentage points."""
    p_open = implied_probability(ml_open)
    p_close = implied_probability(ml_close)
    if p_open is None or p_close is None:
        return None
    return (p_close - p_open) * 100


def arbitrage_margin(home_decimal: Optional[float], away_decimal: Optional[float]) -> Optional[float]:
    """Guaranteed profit percent from backing both sides, or None if there is none."""
    if not home_decimal or not away_decimal:
        return None
    inverse_sum = 1 / home_decimal + 1 / away_decimal
    if inverse_sum < 1:
        return (1 - inverse_sum) * 100
    return None


def volatility_score(report: SignalReport) -> float:
    """
    Composite movement score, rounded to 2 places.

    Relative ranking signal only: no unit and no upper bound. Missing
    components count as 0.
    """
    components = (
        abs(report.line_move or 0.0),
        max(report.spread_range or 0.0, 0.0) * 0.5,
        abs(report.total_move or 0.0) * 0.5,
        max(report.total_range or 0.0, 0.0) * 0.25,
        report.max_probability_shift / 5,
    )
    score = sum(components)
    return round(score, 2) if math.isfinite(score) else 0.0


# -------------------------------
# Internals
# -------------------------------
def _delta(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    d = a - b
    return d if math.isfinite(d) else None


def _negate(x: Optional[float]) -> Optional[float]:
    if x is None:
        return None
    return -x or 0.0   # no -0.0
