from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from utils.settings import get_settings


@asynccontextmanager
async def get_http_client(timeout: Optional[float] = None) -> AsyncIterator[httpx.AsyncClient]:
    """
    Provide a configured HTTPX async client for the upstream feeds.
    """
    settings = get_settings()
    headers = {"User-Agent": settings.user_agent}
    async with httpx.AsyncClient(
        timeout=timeout or settings.http_timeout,
        headers=headers,
        follow_redirects=True,
    ) as client:
        yield client


@asynccontextmanager
async def use_client(client: Optional[httpx.AsyncClient] = None) -> AsyncIterator[httpx.AsyncClient]:
    """
    Reuse ``client`` when the caller already holds one, otherwise open a fresh one.
    """
    if client is not None:
        yield client
        return
    async with get_http_client() as owned:
        yield owned
