"""Assemble news sections and quotes into one cached dashboard snapshot."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import httpx

from utils.http_client import use_client
from utils.logger import get_logger
from utils.settings import get_settings

from .cache import TTLCache
from .formatting import build_brief
from .models import DashboardSnapshot
from .news import fetch_news_sections
from .stocks import fetch_stocks

logger = get_logger(__name__)

SNAPSHOT_KEY = "dashboard"
SNAPSHOT_CACHE: TTLCache[DashboardSnapshot] = TTLCache(ttl=get_settings().page_cache_ttl)
_REBUILD_LOCK: Optional[asyncio.Lock] = None


def _rebuild_lock() -> asyncio.Lock:
    global _REBUILD_LOCK
    if _REBUILD_LOCK is None:
        _REBUILD_LOCK = asyncio.Lock()
    return _REBUILD_LOCK


async def build_dashboard(client: Optional[httpx.AsyncClient] = None) -> DashboardSnapshot:
    """Fetch every topic and symbol concurrently and return a fresh snapshot."""

    settings = get_settings()
    async with use_client(client) as http:
        sections, stocks = await asyncio.gather(
            fetch_news_sections(client=http),
            fetch_stocks(client=http),
        )

    generated_at = datetime.now(timezone.utc)
    headline_count = sum(len(section.items) for section in sections)
    priced = sum(1 for stock in stocks if stock.price is not None)
    logger.info(
        "Dashboard built: %s headlines across %s topics, %s/%s quotes",
        headline_count,
        len(sections),
        priced,
        len(stocks),
    )

    return DashboardSnapshot(
        generated_at=generated_at,
        sections=sections,
        stocks=stocks,
        brief=build_brief(sections, stocks, generated_at, settings.display_timezone),
    )


async def get_dashboard(force: bool = False) -> DashboardSnapshot:
    """
    Return the cached snapshot, rebuilding it when older than the page interval.

    Concurrent callers wait on a single rebuild.
    """
    if not force:
        cached = SNAPSHOT_CACHE.get(SNAPSHOT_KEY)
        if cached is not None:
            return cached

    async with _rebuild_lock():
        if not force:
            cached = SNAPSHOT_CACHE.get(SNAPSHOT_KEY)
            if cached is not None:
                return cached
        snapshot = await build_dashboard()
        SNAPSHOT_CACHE.set(SNAPSHOT_KEY, snapshot, ttl=get_settings().page_cache_ttl)
        return snapshot


async def refresh_dashboard() -> None:
    await get_dashboard(force=True)
