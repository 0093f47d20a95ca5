from __future__ import annotations
import json
import logging
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

_MISS = object()


class TTLCache:
    """Very small, process-local TTL cache."""
    def __init__(self, default_ttl: float = 60.0, max_items: int = 500):
        self._ttl = default_ttl
        self._max = max_items
        self._store: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._store.get(key)
            if not item:
                return None
            exp, val = item
            if exp < time.time():
                self._store.pop(key, None)
                return None
            return val

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        with self._lock:
            if key not in self._store and len(self._store) >= self._max:
                # drop the entry closest to expiry
                oldest = min(self._store.items(), key=lambda p: p[1][0])[0]
                self._store.pop(oldest, None)
            self._store[key] = (time.time() + (ttl or self._ttl), value)


class SharedCache:
    """
    Cache-or-fetch with at most one upstream fetch per key and validity window.

    With a redis client, values live in redis as JSON and a ``SET NX EX`` lock
    elects the single worker that calls the fetcher; the others poll for the
    value until ``wait_timeout`` and then fetch directly. Without one (or when
    redis errors), a process-local TTLCache is used. Within a process, a
    per-key lock serialises concurrent callers.
    """

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        *,
        default_ttl: int = 60,
        lock_ttl: int = 10,
        wait_timeout: float = 2.0,
        poll_interval: float = 0.05,
    ):
        self._redis = client
        self._ttl = default_ttl
        self._lock_ttl = lock_ttl
        self._wait_timeout = wait_timeout
        self._poll = poll_interval
        self._local = TTLCache(default_ttl=default_ttl)
        self._locks: Dict[str, List[Any]] = {}   # key -> [lock, holders and waiters]
        self._locks_guard = threading.Lock()

    @classmethod
    def from_url(cls, url: Optional[str], *, timeout: float = 2.0, **kwargs: Any) -> "SharedCache":
        if not url:
            return cls(None, wait_timeout=timeout, **kwargs)
        client = redis.Redis.from_url(
            url,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
            decode_responses=True,
        )
        return cls(client, wait_timeout=timeout, **kwargs)

    @property
    def shared(self) -> bool:
        return self._redis is not None

    def get_or_fetch(self, key: str, fetcher: Callable[[], Any], ttl: Optional[int] = None) -> Any:
        ttl = ttl or self._ttl
        with self._key_lock(key):
            if self._redis is None:
                return self._local_get_or_fetch(key, fetcher, ttl)
            return self._shared_get_or_fetch(key, fetcher, ttl)

    # ------------ internals ------------
    @contextmanager
    def _key_lock(self, key: str) -> Iterator[None]:
        with self._locks_guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def _local_get_or_fetch(self, key: str, fetcher: Callable[[], Any], ttl: int) -> Any:
        hit = self._local.get(key)
        if hit is not None:
            return hit
        data = fetcher()
        self._local.set(key, data, ttl)
        return data

    def _shared_get_or_fetch(self, key: str, fetcher: Callable[[], Any], ttl: int) -> Any:
        lock_key = f"lock:{key}"
        token = uuid.uuid4().hex
        try:
            hit = self._redis.get(key)
            if hit is not None:
                return json.loads(hit)
            owner = self._redis.set(lock_key, token, nx=True, ex=self._lock_ttl)
        except RedisError as e:
            logger.warning("cache unavailable for %s, serving from source: %s", key, e)
            return fetcher()

        if not owner:
            value = self._wait_for(key)
            if value is not _MISS:
                return value
            logger.info("timed out waiting on %s, serving from source", key)
            return fetcher()

        try:
            data = fetcher()
            try:
                self._redis.set(key, json.dumps(data), ex=ttl)
            except RedisError as e:
                logger.warning("could not store %s in cache: %s", key, e)
            return data
        finally:
            self._release(lock_key, token)

    def _wait_for(self, key: str) -> Any:
        deadline = time.monotonic() + self._wait_timeout
        while time.monotonic() < deadline:
            time.sleep(self._poll)
            try:
                hit = self._redis.get(key)
            except RedisError as e:
                logger.warning("cache unavailable while waiting on %s: %s", key, e)
                return _MISS
            if hit is not None:
                return json.loads(hit)
        return _MISS

    def _release(self, lock_key: str, token: str) -> None:
        try:
            if self._redis.get(lock_key) == token:
                self._redis.delete(lock_key)
        except RedisError as e:
            # lock expires on its own after lock_ttl
            logger.warning("could not release %s: %s", lock_key, e)
