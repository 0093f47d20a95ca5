import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.config import Sport, games_file_for

logger = logging.getLogger(__name__)


class LocalFileProvider:
    """
    Games from the JSON files written by ``oddsdash-convert``.
    A per-season split is preferred when it exists.
    """
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, sport: Sport, season: Optional[int] = None) -> Optional[Path]:
        if season is not None:
            split = self.data_dir / games_file_for(sport, season)
            if split.is_file():
                return split
        full = self.data_dir / games_file_for(sport)
        return full if full.is_file() else None

    def games(self, sport: Sport, season: Optional[int] = None) -> Optional[List[Dict[str, Any]]]:
        """All games in the sport's file, or None when there is no file."""
        path = self.path_for(sport, season)
        if path is None:
            return None
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            logger.warning("%s does not hold a list of games, ignoring", path)
            return None
        return [g for g in data if isinstance(g, dict)]
