from typing import Annotated, Any, Literal, Optional
from collections.abc import Mapping
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .values import to_number

Number = Annotated[Optional[float], BeforeValidator(to_number)]

Signal = Literal["SPREAD STEAM", "REVERSE", "TOTAL STEAM", "ML STEAM", "ARB"]
SPREAD_STEAM: Signal = "SPREAD STEAM"
REVERSE: Signal = "REVERSE"
TOTAL_STEAM: Signal = "TOTAL STEAM"
ML_STEAM: Signal = "ML STEAM"
ARB: Signal = "ARB"


def mapping_or_none(value: Any) -> Any:
    return value if isinstance(value, (Mapping, BaseModel)) else None


class MarketQuote(BaseModel):
    """Observed range of one line over the betting window.

    ``min <= open, close <= max`` is expected but never enforced.
    """
    model_config = ConfigDict(frozen=True)

    open: Number = None
    min: Number = None
    max: Number = None
    close: Number = None

    def has_values(self) -> bool:
        return any(v is not None for v in (self.open, self.min, self.max, self.close))


Quote = Annotated[Optional[MarketQuote], BeforeValidator(mapping_or_none)]


class SidedQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    home: Quote = None
    away: Quote = None

    def has_values(self) -> bool:
        return any(q is not None and q.has_values() for q in (self.home, self.away))


class MarketHistory(BaseModel):
    """Resolved open/min/max/close for every market channel of one game."""
    model_config = ConfigDict(frozen=True)

    home_spread: MarketQuote = MarketQuote()
    away_spread: MarketQuote = MarketQuote()
    home_moneyline: MarketQuote = MarketQuote()
    away_moneyline: MarketQuote = MarketQuote()
    total: MarketQuote = MarketQuote()
    total_over: MarketQuote = MarketQuote()
    total_under: MarketQuote = MarketQuote()
    home_spread_odds: MarketQuote = MarketQuote()
    away_spread_odds: MarketQuote = MarketQuote()


class BestPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: Optional[float] = None     # american odds
    decimal: Optional[float] = None


class SignalReport(BaseModel):
    line_move: Optional[float] = None
    total_move: Optional[float] = None
    spread_range: Optional[float] = None
    total_range: Optional[float] = None
    clv: Optional[float] = None
    reverse: bool = False
    home_probability_shift: Optional[float] = None   # percentage points
    away_probability_shift: Optional[float] = None
    max_probability_shift: float = 0.0
    best_home: BestPrice = BestPrice()
    best_away: BestPrice = BestPrice()
    arb_profit: Optional[float] = None               # percent
    signals: list[Signal] = Field(default_factory=list)
