# oddsdash/services/games.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..clients.supabase import SupabaseClient, SupabaseError
from ..core.cache import SharedCache
from ..core.config import Settings, Sport
from ..providers.files import LocalFileProvider
from ..providers.mock import DemoProvider
from .summary import summarize_games

logger = logging.getLogger(__name__)


def games_cache_key(sport: str, season: Optional[int], conference: Optional[str],
                    book: Optional[str], limit: int) -> str:
    return f"games:{sport}:{season or 'all'}:{conference or 'all'}:{book or 'all'}:{limit}"


def filter_games(
    games: Iterable[Dict[str, Any]],
    *,
    season: Optional[int] = None,
    conference: Optional[str] = None,
    book: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Same filters the database procedure applies, for the file/demo tiers."""
    conf = conference.lower() if conference else None
    bk = book.lower() if book else None
    out: List[Dict[str, Any]] = []
    for g in games:
        if season is not None and g.get("season") != season:
            continue
        if conf and conf not in (str(g.get("homeConference") or "").lower(),
                                 str(g.get("awayConference") or "").lower()):
            continue
        if bk and str(g.get("lineProvider") or "").lower() != bk:
            continue
        out.append(g)
        if limit is not None and len(out) >= limit:
            break
    return out


class GameStore:
    """
    Games for the dashboard, tried in order:
      shared cache -> database (Supabase RPC) -> local JSON file -> demo data
    """

    def __init__(
        self,
        settings: Settings,
        *,
        cache: Optional[SharedCache] = None,
        database: Optional[SupabaseClient] = None,
        files: Optional[LocalFileProvider] = None,
        demo: Optional[DemoProvider] = None,
    ):
        self.settings = settings
        self.cache = cache or SharedCache.from_url(
            settings.redis_url,
            timeout=settings.cache_timeout_seconds,
            default_ttl=settings.cache_ttl_seconds,
            lock_ttl=settings.cache_lock_seconds,
        )
        if database is None and settings.has_database:
            database = SupabaseClient(settings.supabase_url, settings.supabase_key)
        self.database = database
        self.files = files or LocalFileProvider(settings.data_dir)
        self.demo = demo or (DemoProvider() if settings.demo_fallback else None)

    def close(self) -> None:
        if self.database is not None:
            self.database.close()

    # ------------ games ------------
    def games(
        self,
        sport: Sport,
        season: Optional[int] = None,
        conference: Optional[str] = None,
        book: Optional[str] = None,
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        key = games_cache_key(sport, season, conference, book, limit)
        return self.cache.get_or_fetch(
            key,
            lambda: self._fetch_games(sport, season, conference, book, limit),
            ttl=self.settings.cache_ttl_seconds,
        )

    def _fetch_games(self, sport: Sport, season: Optional[int], conference: Optional[str],
                     book: Optional[str], limit: int) -> List[Dict[str, Any]]:
        if self.database is not None:
            try:
                return self.database.games_for_dashboard(sport, season, conference, book, limit)
            except SupabaseError as e:
                logger.warning("database unavailable for %s games, falling back: %s", sport, e)

        rows = self._local_games(sport, season)
        if rows is None:
            return []
        return filter_games(rows, season=season, conference=conference, book=book, limit=limit)

    def _local_games(self, sport: Sport, season: Optional[int]) -> Optional[List[Dict[str, Any]]]:
        try:
            rows = self.files.games(sport, season)
        except (OSError, ValueError) as e:
            logger.warning("could not read local %s games: %s", sport, e)
            rows = None
        if rows is not None:
            return rows
        if self.demo is not None:
            logger.info("no data source for %s, serving demo games", sport)
            return self.demo.games(sport, self.settings.demo_games)
        return None

    # ------------ stats ------------
    def stats(self, sport: Sport, season: Optional[int] = None) -> Dict[str, Any]:
        key = f"stats:{sport}:{season or 'all'}"
        return self.cache.get_or_fetch(key, lambda: self._fetch_stats(sport, season),
                                       ttl=self.settings.cache_ttl_seconds)

    def _fetch_stats(self, sport: Sport, season: Optional[int]) -> Dict[str, Any]:
        if self.database is not None:
            try:
                return self.database.dashboard_stats(sport, season)
            except SupabaseError as e:
                logger.warning("database unavailable for %s stats, falling back: %s", sport, e)
        rows = self._local_games(sport, season) or []
        return summarize_games(filter_games(rows, season=season))
