from oddsdash.services.formatting import (
    MISSING,
    TableRenderer,
    advanced_table,
    compose_renderers,
    format_edge_summary,
    format_matchup,
    format_number,
    format_odds,
    format_odds_with_decimal,
    format_prob_shift,
    format_range,
    format_signals,
    format_signed,
    format_spread_summary,
    games_table,
)
from oddsdash.services.metrics import compute_game_metrics


def test_format_odds():
    assert format_odds(150) == "+150"
    assert format_odds(-110) == "-110"
    assert format_odds("-105.4") == "-105"
    assert format_odds(None) == MISSING
    assert format_odds("abc") == MISSING


def test_format_odds_with_decimal():
    assert format_odds_with_decimal(150, 2.5) == "+150 (2.50x)"
    assert format_odds_with_decimal(-200, None) == "-200"
    assert format_odds_with_decimal(None, 2.5) == MISSING


def test_numbers_and_ranges():
    assert format_number(-3.5) == "-3.5"
    assert format_number(None) == MISSING
    assert format_signed(2.5) == "+2.5"
    assert format_signed(-1) == "-1.0"
    assert format_signed(None) == ""
    assert format_range(-7, -3) == "-7.0 to -3.0"
    assert format_range(-7, None) == MISSING


def test_format_prob_shift():
    assert format_prob_shift(3.14) == " (+3.1 pp)"
    assert format_prob_shift(-7.62) == " (-7.6 pp)"
    assert format_prob_shift(0) == ""
    assert format_prob_shift(None) == ""


def test_signal_chips():
    assert format_signals(["SPREAD STEAM", "ARB"]) == "[SPREAD STEAM] [ARB]"
    assert format_signals([]) == MISSING


GAME = {
    "id": 1, "season": 2023, "week": 2, "startDate": "2023-09-09T16:00:00.000Z",
    "homeTeam": "Alabama", "awayTeam": "Texas", "homeScore": 24, "awayScore": 34,
    "lineProvider": "Bovada", "neutralVenue": False,
    "homeLineOpen": -7, "homeLineClose": -4, "homeLineMin": -7.5, "homeLineMax": -3.5,
    "homeMoneylineOpen": -280, "homeMoneylineClose": -180,
    "awayMoneylineOpen": 160, "awayMoneylineClose": 155,
}


def test_cell_summaries():
    m = compute_game_metrics(GAME)
    assert format_matchup(m) == "Texas @ Alabama\nFinal 34-24\nBovada"
    spread = format_spread_summary(m).splitlines()
    assert spread[0] == f"Open -7.0 @ {MISSING}"
    assert spread[1].startswith("Close -4.0 (delta +3.0)")
    assert spread[2] == "Range -7.5 to -3.5"
    edge = format_edge_summary(m)
    assert "CLV -3.0" in edge and f"Arb {MISSING}" in edge


def test_advanced_table_columns_in_order():
    table = advanced_table()
    assert table.columns == ["season", "week", "date", "matchup", "spread", "moneyline", "total", "signals", "edge"]
    row = table.render_row(compute_game_metrics(GAME))
    assert list(row) == table.columns
    assert row["date"] == "2023-09-09"
    assert row["signals"].startswith("[SPREAD STEAM] [REVERSE]")


def test_renderer_add_and_compose():
    custom = TableRenderer("ids").add("id", lambda g: str(g.id))
    render = compose_renderers(games_table(), custom)
    out = render([compute_game_metrics(GAME), compute_game_metrics({"id": 2})])
    assert list(out) == ["games", "ids"]
    assert [r["id"] for r in out["ids"]] == ["1", "2"]
    assert out["games"][1]["spread"] == MISSING
