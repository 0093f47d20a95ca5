# oddsdash/core/config.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ----- Public types -----
Sport = Literal["NCAAF", "NFL"]

# ----- App settings (env-driven) -----
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True)

    supabase_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUPABASE_SERVICE_ROLE_KEY")
    )
    supabase_anon_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")
    )
    redis_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("REDIS_URL", "KV_URL"))

    cache_ttl_seconds: int = 60
    cache_lock_seconds: int = 10
    cache_timeout_seconds: float = 2.0

    data_dir: Path = Path("data")
    default_sport: Sport = "NCAAF"
    default_limit: int = 500
    demo_fallback: bool = True
    demo_games: int = 48

    log_level: str = "INFO"
    environment: str = Field(default="unknown", validation_alias=AliasChoices("VERCEL_ENV", "ENVIRONMENT"))

    @property
    def supabase_key(self) -> Optional[str]:
        """Service role key wins over the anon key."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def has_database(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

# ----- Local data file metadata -----
SUPPORTED: dict[Sport, dict] = {
    "NCAAF": {"games_file": "ncaaf-games.json", "season_file": "season-{season}.json"},
    "NFL":   {"games_file": "nfl-games.json",   "season_file": "nfl-season-{season}.json"},
}

def games_file_for(sport: Sport, season: Optional[int] = None) -> str:
    """File name holding a sport's games; season files are per-season splits."""
    meta = SUPPORTED[sport]
    if season is not None:
        return meta["season_file"].format(season=season)
    return meta["games_file"]
