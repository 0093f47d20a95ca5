import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from ..core.config import Sport
from ..maps.nfl import NFL_DIVISIONS
from ..services.odds import decimal_to_american

NCAAF_TEAMS: dict[str, str] = {
    "Alabama": "SEC", "Georgia": "SEC", "LSU": "SEC", "Texas": "SEC",
    "Ohio State": "Big Ten", "Michigan": "Big Ten", "Penn State": "Big Ten", "Oregon": "Big Ten",
    "Clemson": "ACC", "Florida State": "ACC", "Miami": "ACC", "Louisville": "ACC",
    "Utah": "Big 12", "Kansas State": "Big 12", "Oklahoma State": "Big 12", "Baylor": "Big 12",
}


class DemoProvider:
    """
    Deterministic demo slate so the dashboard renders without any data source.
    Same seed, same games. Every quote satisfies min <= open, close <= max.
    """
    def __init__(self, seed: int = 7, season: int = 2024):
        self.seed = seed
        self.season = season

    def games(self, sport: Sport, count: int = 48) -> List[Dict[str, Any]]:
        rng = random.Random(f"{self.seed}:{sport}")
        teams = NFL_DIVISIONS if sport == "NFL" else NCAAF_TEAMS
        names = sorted(teams)
        kickoff0 = datetime(self.season, 9, 7, 17, 0, tzinfo=timezone.utc)
        return [self._game(rng, sport, names, teams, i, kickoff0) for i in range(count)]

    def _game(self, rng: random.Random, sport: Sport, names: List[str], teams: Dict[str, str],
              i: int, kickoff0: datetime) -> Dict[str, Any]:
        home, away = rng.sample(names, 2)
        week = i // 8 + 1
        start = kickoff0 + timedelta(days=7 * (week - 1), hours=3 * (i % 4))

        spread_open = rng.choice([-10.5, -7, -6.5, -3.5, -3, -2.5, -1, 1, 2.5, 3, 6.5])
        spread_close = spread_open + rng.choice([-3, -1.5, -0.5, 0, 0, 0.5, 1, 2.5])
        total_open = round(rng.uniform(38, 56) * 2) / 2
        total_close = total_open + rng.choice([-2.5, -1, 0, 0.5, 1.5, 3])

        home_dec_open = round(rng.uniform(1.45, 2.9), 2)
        home_dec_close = round(home_dec_open + rng.uniform(-0.25, 0.25), 2)
        away_dec_open = round(1 / max(1.06 - 1 / home_dec_open, 0.2), 2)
        away_dec_close = round(away_dec_open + rng.uniform(-0.25, 0.25), 2)

        completed = week < 6
        game: Dict[str, Any] = {
            "id": f"demo-{sport.lower()}-{self.season}-{i + 1:03d}",
            "sport": sport,
            "season": self.season,
            "week": week,
            "startDate": start.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            "seasonType": "Regular",
            "homeTeam": home,
            "awayTeam": away,
            "homeConference": teams[home],
            "awayConference": teams[away],
            "homeScore": rng.randint(10, 42) if completed else None,
            "awayScore": rng.randint(7, 38) if completed else None,
            "completed": completed,
            "lineProvider": rng.choice(["Consensus", "DraftKings", "Bovada"]),
            "spread": spread_close,
            "openingSpread": spread_open,
            "overUnder": total_close,
            "openingOverUnder": total_open,
        }
        game.update(_quote("homeLine", spread_open, spread_close, rng, 0.5))
        game.update(_quote("awayLine", -spread_open, -spread_close, rng, 0.5))
        game.update(_quote("totalScore", total_open, total_close, rng, 0.5))

        home_ml = _quote("homeMoneyline", home_dec_open, home_dec_close, rng, 0.05)
        away_ml = _quote("awayMoneyline", away_dec_open, away_dec_close, rng, 0.05)
        for key, dec in (*home_ml.items(), *away_ml.items()):
            # decimal prices -> american, as the workbook importer does
            game[key] = decimal_to_american(max(dec, 1.01))
        game["homeMoneyline"] = game["homeMoneylineClose"]
        game["awayMoneyline"] = game["awayMoneylineClose"]
        return game


def _quote(prefix: str, open_: float, close: float, rng: random.Random, step: float) -> Dict[str, float]:
    lo = min(open_, close) - step * rng.randint(0, 2)
    hi = max(open_, close) + step * rng.randint(0, 2)
    return {f"{prefix}Open": open_, f"{prefix}Min": lo, f"{prefix}Max": hi, f"{prefix}Close": close}
