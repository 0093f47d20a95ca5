from oddsdash.providers.mock import DemoProvider
from oddsdash.services.metrics import compute_metrics


def test_demo_is_deterministic():
    assert DemoProvider(seed=3).games("NCAAF", 10) == DemoProvider(seed=3).games("NCAAF", 10)
    assert DemoProvider(seed=3).games("NCAAF", 10) != DemoProvider(seed=4).games("NCAAF", 10)


def test_demo_quotes_are_ordered():
    for g in DemoProvider().games("NFL", 48):
        for prefix in ("homeLine", "awayLine", "totalScore", "homeMoneyline", "awayMoneyline"):
            lo, hi = g[f"{prefix}Min"], g[f"{prefix}Max"]
            assert lo <= g[f"{prefix}Open"] <= hi, prefix
            assert lo <= g[f"{prefix}Close"] <= hi, prefix


def test_demo_games_render_through_engine():
    games = DemoProvider().games("NCAAF", 16)
    metrics = compute_metrics(games)
    assert len(metrics) == 16
    assert all(m.home_conference for m in metrics)
    assert any(m.signals for m in metrics)
