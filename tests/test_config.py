import pytest
from fastapi import HTTPException

from oddsdash.core.config import Settings, games_file_for
from oddsdash.services.validation import validate_sport


def test_env_aliases(monkeypatch):
    monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("KV_URL", "redis://localhost:6379/0")
    monkeypatch.setenv("VERCEL_ENV", "preview")
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)
    s = Settings(_env_file=None)
    assert s.supabase_url == "https://x.supabase.co"
    assert s.redis_url == "redis://localhost:6379/0"
    assert s.environment == "preview"
    assert s.supabase_key == "anon" and s.has_database


def test_service_role_key_wins(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
    assert Settings(_env_file=None).supabase_key == "service"


def test_games_file_for():
    assert games_file_for("NCAAF") == "ncaaf-games.json"
    assert games_file_for("NFL") == "nfl-games.json"
    assert games_file_for("NCAAF", 2023) == "season-2023.json"
    assert games_file_for("NFL", 2023) == "nfl-season-2023.json"


def test_validate_sport():
    assert validate_sport("nfl") == "NFL"
    assert validate_sport(None) == "NCAAF"
    assert validate_sport(" ", default="NFL") == "NFL"
    with pytest.raises(HTTPException) as e:
        validate_sport("mlb")
    assert e.value.status_code == 422
