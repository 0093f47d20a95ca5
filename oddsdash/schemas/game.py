"""
Wire records for games.

``GameRecord`` is the canonical game as produced by ingestion (camelCase on the
wire, snake_case in Python). Every scalar passes through a lenient coercion so
a malformed row validates with ``None`` in the bad field instead of raising.
Unknown fields are kept and round-trip untouched.

``GameMetrics`` is a ``GameRecord`` decorated by the analytics engine.
"""
from __future__ import annotations

from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..domain.models import MarketQuote, Number, Quote, SidedQuote, mapping_or_none
from ..domain.values import clean_string, to_boolean, to_integer


def _game_id(value: Any) -> Any:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int):
        return value
    return clean_string(value)


Integer = Annotated[Optional[int], BeforeValidator(to_integer)]
Text = Annotated[Optional[str], BeforeValidator(clean_string)]
Flag = Annotated[Optional[bool], BeforeValidator(to_boolean)]
GameId = Annotated[Optional[Union[int, str]], BeforeValidator(_game_id)]
Sided = Annotated[Optional[SidedQuote], BeforeValidator(mapping_or_none)]


class _Wire(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class GameRecord(_Wire):
    # ----- identity -----
    id: GameId = None
    sport: Text = None
    season: Integer = None
    week: Integer = None
    start_date: Text = None
    season_type: Text = None
    home_team: Text = None
    away_team: Text = None
    home_conference: Text = None
    away_conference: Text = None
    home_score: Integer = None
    away_score: Integer = None
    completed: Flag = None
    line_provider: Text = None
    neutral_venue: Flag = None
    playoff_game: Flag = None
    notes: Text = None

    # ----- scalar lines (close unless named opening) -----
    spread: Number = None
    opening_spread: Number = None
    over_under: Number = None
    opening_over_under: Number = None
    home_moneyline: Number = None
    away_moneyline: Number = None

    # ----- flat open/min/max/close -----
    home_line_open: Number = None
    home_line_min: Number = None
    home_line_max: Number = None
    home_line_close: Number = None
    away_line_open: Number = None
    away_line_min: Number = None
    away_line_max: Number = None
    away_line_close: Number = None
    home_moneyline_open: Number = None
    home_moneyline_min: Number = None
    home_moneyline_max: Number = None
    home_moneyline_close: Number = None
    away_moneyline_open: Number = None
    away_moneyline_min: Number = None
    away_moneyline_max: Number = None
    away_moneyline_close: Number = None
    home_line_odds_open: Number = None
    home_line_odds_min: Number = None
    home_line_odds_max: Number = None
    home_line_odds_close: Number = None
    away_line_odds_open: Number = None
    away_line_odds_min: Number = None
    away_line_odds_max: Number = None
    away_line_odds_close: Number = None
    total_score_open: Number = None
    total_score_min: Number = None
    total_score_max: Number = None
    total_score_close: Number = None
    total_score_over_open: Number = None
    total_score_over_min: Number = None
    total_score_over_max: Number = None
    total_score_over_close: Number = None
    total_score_under_open: Number = None
    total_score_under_min: Number = None
    total_score_under_max: Number = None
    total_score_under_close: Number = None

    # ----- nested histories -----
    spread_history: Sided = None
    moneyline_history: Sided = None
    spread_odds_history: Sided = None
    total_history: Quote = None
    total_over_odds_history: Quote = None
    total_under_odds_history: Quote = None


class GameMetrics(GameRecord):
    line_move: Optional[float] = None
    total_move: Optional[float] = None
    spread_range: Optional[float] = None
    total_range: Optional[float] = None
    clv: Optional[float] = None
    signals: List[str] = Field(default_factory=list)
    arb_profit: Optional[float] = None
    home_probability_shift: Optional[float] = None
    away_probability_shift: Optional[float] = None
    moneyline_steam: float = 0.0

    spread_open: Optional[float] = None
    spread_close: Optional[float] = None
    spread_min: Optional[float] = None
    spread_max: Optional[float] = None
    total_open: Optional[float] = None
    total_close: Optional[float] = None
    total_min: Optional[float] = None
    total_max: Optional[float] = None
    spread_odds_open: Optional[float] = None
    spread_odds_close: Optional[float] = None
    total_over_open: Optional[float] = None
    total_over_close: Optional[float] = None
    total_under_open: Optional[float] = None
    total_under_close: Optional[float] = None

    best_home_moneyline: Optional[float] = None
    best_home_moneyline_decimal: Optional[float] = None
    best_away_moneyline: Optional[float] = None
    best_away_moneyline_decimal: Optional[float] = None
    volatility_score: float = 0.0


__all__ = ["GameRecord", "GameMetrics", "MarketQuote", "SidedQuote"]
