# oddsdash/deps.py
import threading
from typing import Optional

from fastapi import Depends

from .core.config import get_settings
from .services.games import GameStore

_store: Optional[GameStore] = None
_store_lock = threading.Lock()


def get_game_store() -> GameStore:
    """
    Returns the process-wide game store.
    Built lazily from settings so importing the app never touches redis or the database.
    Tests swap it with ``app.dependency_overrides[get_game_store]``.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = GameStore(get_settings())
    return _store


def close_game_store() -> None:
    global _store
    with _store_lock:
        if _store is not None:
            _store.close()
            _store = None


def store_dep(store: GameStore = Depends(get_game_store)) -> GameStore:
    return store
