import json

import pytest

from oddsdash.core.cache import SharedCache
from oddsdash.core.config import Settings
from oddsdash.providers.files import LocalFileProvider
from oddsdash.providers.mock import DemoProvider
from oddsdash.services.games import GameStore

NCAAF_GAMES = [
    {"id": 1, "sport": "NCAAF", "season": 2023, "homeTeam": "Georgia", "awayTeam": "Auburn",
     "homeConference": "SEC", "awayConference": "SEC", "lineProvider": "Bovada",
     "spread": -14, "openingSpread": -10.5, "overUnder": 52.5, "openingOverUnder": 50,
     "homeMoneyline": -600, "awayMoneyline": 425, "completed": True, "homeScore": 27, "awayScore": 20},
    {"id": 2, "sport": "NCAAF", "season": 2023, "homeTeam": "Clemson", "awayTeam": "Miami",
     "homeConference": "ACC", "awayConference": "ACC", "lineProvider": "DraftKings",
     "spread": -3, "overUnder": 45},
    {"id": 3, "sport": "NCAAF", "season": 2024, "homeTeam": "Texas", "awayTeam": "Michigan",
     "homeConference": "SEC", "awayConference": "Big Ten", "lineProvider": "bovada"},
]


def make_settings(tmp_path, **overrides):
    values = dict(
        supabase_url=None,
        supabase_service_role_key=None,
        supabase_anon_key=None,
        redis_url=None,
        data_dir=tmp_path,
        demo_games=12,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def data_dir(tmp_path):
    write_json(tmp_path / "ncaaf-games.json", NCAAF_GAMES)
    return tmp_path


@pytest.fixture
def store(data_dir):
    settings = make_settings(data_dir)
    return GameStore(
        settings,
        cache=SharedCache(None),
        files=LocalFileProvider(data_dir),
        demo=DemoProvider(),
    )
