# oddsdash/services/odds.py
from __future__ import annotations

import math
from typing import Any, Iterable, Optional

from ..domain.models import BestPrice
from ..domain.values import to_number


# -------------------------------
# Public API
# -------------------------------
def moneyline_to_decimal(ml: Any) -> Optional[float]:
    """
    American odds -> decimal odds.

      +150 -> 2.5
      -150 -> 1.667

    0 is not a valid American price and yields None, as does anything
    non-numeric or non-finite.
    """
    odds = to_number(ml)
    if odds is None or odds == 0:
        return None
    if odds > 0:
        return odds / 100 + 1
    return 100 / abs(odds) + 1


def implied_probability(ml: Any) -> Optional[float]:
    """American odds -> implied win probability in (0, 1), vig included."""
    odds = to_number(ml)
    if odds is None or odds == 0:
        return None
    if odds > 0:
        return 100 / (odds + 100)
    a = abs(odds)
    return a / (a + 100)


def decimal_to_american(decimal: Any) -> Optional[int]:
    """
    Decimal odds -> American odds as delivered by sportsbook exports.

      d >= 2      ->  round((d - 1) * 100)
      1 < d < 2   -> -round(100 / (d - 1))
      d <= 1      ->  None
    """
    d = to_number(decimal)
    if d is None or d <= 1:
        return None
    if d >= 2:
        return _round_half_up((d - 1) * 100)
    return -_round_half_up(100 / (d - 1))


def select_best_price(candidates: Iterable[Any]) -> BestPrice:
    """
    Best payout among quoted moneylines for one side.

    Nulls and non-finite values are skipped. The first candidate with the
    highest decimal odds wins ties.
    """
    best_value: Optional[float] = None
    best_decimal: Optional[float] = None
    for candidate in candidates:
        value = to_number(candidate)
        if value is None:
            continue
        decimal = moneyline_to_decimal(value)
        if decimal is None:
            continue
        if best_decimal is None or decimal > best_decimal:
            best_value, best_decimal = value, decimal
    return BestPrice(value=best_value, decimal=best_decimal)


# -------------------------------
# Internals
# -------------------------------
def _round_half_up(x: float) -> int:
    # ties round up, not to even
    return int(math.floor(x + 0.5))
