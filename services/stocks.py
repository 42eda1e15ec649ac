"""Yahoo Finance chart quotes for the watchlist."""

from __future__ import annotations

import asyncio
import json
import math
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

from core.watchlist import WATCHLIST, WatchSymbol, yahoo_symbol
from utils.http_client import use_client
from utils.logger import get_logger
from utils.settings import get_settings

from .cache import fetch_text
from .models import StockQuote

logger = get_logger(__name__)

CHART_PARAMS = {"range": "2d", "interval": "1d"}


def build_chart_url(symbol: str) -> str:
    settings = get_settings()
    base_url = str(settings.yahoo_chart_url).rstrip("/")
    path = f"{base_url}/{quote(yahoo_symbol(symbol), safe='')}"
    return str(httpx.URL(path, params=CHART_PARAMS))


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def extract_closes(payload: Any) -> List[float]:
    """Pull the numeric daily closes out of a chart response; gaps are dropped."""
    try:
        result = payload["chart"]["result"][0]
        closes = result["indicators"]["quote"][0]["close"]
    except (KeyError, IndexError, TypeError):
        return []
    if not isinstance(closes, list):
        return []
    return [float(value) for value in closes if _is_number(value)]


def change_percentage(previous: float, latest: float) -> Optional[float]:
    if previous == 0:
        return None
    return (latest - previous) / previous * 100


def _empty_quote(item: WatchSymbol) -> StockQuote:
    return StockQuote(symbol=item.symbol, name=item.name, currency=item.currency)


async def fetch_stock(
    symbol: str,
    name: str,
    currency: str,
    client: Optional[httpx.AsyncClient] = None,
) -> StockQuote:
    """
    Fetch the two most recent daily closes for ``symbol`` and derive the change.

    Any failure, or fewer than two closes, yields a quote with null prices.
    """
    settings = get_settings()
    item = WatchSymbol(symbol=symbol, name=name, currency=currency)
    url = build_chart_url(symbol)

    async with use_client(client) as http:
        try:
            body = await fetch_text(http, url, ttl=settings.quote_cache_ttl)
        except httpx.HTTPStatusError as exc:
            logger.warning("Yahoo chart returned HTTP %s for %s", exc.response.status_code, symbol)
            return _empty_quote(item)
        except httpx.HTTPError as exc:
            logger.warning("Yahoo chart request failed for %s: %s", symbol, exc)
            return _empty_quote(item)

    try:
        payload: Dict[str, Any] = json.loads(body)
    except ValueError as exc:
        logger.warning("Yahoo chart returned invalid JSON for %s: %s", symbol, exc)
        return _empty_quote(item)

    closes = extract_closes(payload)
    if len(closes) < 2:
        logger.info("Not enough closes for %s (%s)", symbol, len(closes))
        return _empty_quote(item)

    previous_close = closes[-2]
    price = closes[-1]
    return StockQuote(
        symbol=symbol,
        name=name,
        currency=currency,
        price=price,
        previous_close=previous_close,
        change_pct=change_percentage(previous_close, price),
    )


async def fetch_stocks(
    watchlist: Sequence[WatchSymbol] = WATCHLIST,
    client: Optional[httpx.AsyncClient] = None,
) -> List[StockQuote]:
    async with use_client(client) as http:
        quotes = await asyncio.gather(
            *(fetch_stock(item.symbol, item.name, item.currency, client=http) for item in watchlist)
        )
    return list(quotes)
