"""Timed in-memory cache for upstream responses and dashboard snapshots."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Tuple, TypeVar

import httpx

from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

CacheEntry = Tuple[float, float, Any]


class TTLCache(Generic[T]):
    """Map of key -> value that forgets values older than their TTL."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[T]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, ttl, value = entry
            if now - stored_at < ttl:
                return value
            self._entries.pop(key, None)
        return None

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), self.ttl if ttl is None else ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


RESPONSE_CACHE: TTLCache[str] = TTLCache(ttl=900)


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    ttl: float,
    params: Optional[Mapping[str, str]] = None,
    cache: Optional[TTLCache[str]] = None,
) -> str:
    """
    GET ``url`` and return the body, serving repeats from the cache for ``ttl`` seconds.

    Only 2xx bodies are stored; an error status raises ``httpx.HTTPStatusError``.
    """
    store = RESPONSE_CACHE if cache is None else cache
    request_url = str(httpx.URL(url, params=params)) if params else url

    cached = store.get(request_url)
    if cached is not None:
        logger.debug("Cache hit for %s", request_url)
        return cached

    response = await client.get(request_url)
    response.raise_for_status()
    body = response.text
    store.set(request_url, body, ttl=ttl)
    return body
