# oddsdash/cli.py
"""
oddsdash-convert: turn the raw NCAAF CSV and/or the NFL workbook into the
JSON files the game store reads from ``data_dir``.

    oddsdash-convert --csv master_NCAAF_GamesWithOdds_Long.csv --nfl nfl.xlsx --out data
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .core.config import Sport, games_file_for
from .core.logging import configure_logging
from .services.ingest import read_games_csv, read_nfl_workbook, split_by_season, write_games
from .services.summary import summarize_games

logger = logging.getLogger("oddsdash.convert")

# Games above which per-season files are also written
SPLIT_THRESHOLDS = {"NCAAF": 10_000, "NFL": 1_000}


def _write_sport(games: List[Mapping], sport: Sport, out_dir: Path, threshold: Optional[int]) -> None:
    write_games(games, out_dir / games_file_for(sport))
    limit = SPLIT_THRESHOLDS[sport] if threshold is None else threshold
    if len(games) > limit:
        for season, chunk in split_by_season(games).items():
            write_games(chunk, out_dir / games_file_for(sport, season))

    summary = summarize_games(games)
    logger.info("%s seasons: %s", sport, ", ".join(str(s) for s in summary["seasons"]) or "none")
    logger.info("%s sportsbooks: %d, conferences: %d", sport,
                len(summary["sportsbooks"]), len(summary["conferences"]))
    logger.info(
        "%s coverage: spreads %d (%.1f%%), totals %d (%.1f%%), scores %d (%.1f%%)",
        sport,
        summary["withSpreads"], summary["spreadCoverage"],
        summary["withTotals"], summary["totalCoverage"],
        summary["withScores"], summary["scoreCoverage"],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oddsdash-convert", description="Convert raw odds data to dashboard JSON")
    parser.add_argument("--csv", type=Path, default=None, help="NCAAF long-format games CSV")
    parser.add_argument("--nfl", type=Path, default=None, help="NFL odds workbook (.xlsx)")
    parser.add_argument("--out", type=Path, default=Path("data"), help="Output directory (default: data)")
    parser.add_argument(
        "--split-threshold",
        type=int,
        default=None,
        help="Write per-season files above this many games (default: 10000 NCAAF, 1000 NFL)",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.csv is None and args.nfl is None:
        logger.error("nothing to convert: pass --csv and/or --nfl")
        return 2
    missing = [p for p in (args.csv, args.nfl) if p is not None and not p.is_file()]
    if missing:
        for p in missing:
            logger.error("input not found: %s", p)
        return 1

    if args.csv is not None:
        games = read_games_csv(args.csv, sport="NCAAF")
        _write_sport(games, "NCAAF", args.out, args.split_threshold)

    if args.nfl is not None:
        nfl_games = read_nfl_workbook(args.nfl)
        if nfl_games:
            _write_sport(nfl_games, "NFL", args.out, args.split_threshold)
        else:
            logger.warning("no NFL games could be normalized from %s", args.nfl)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
