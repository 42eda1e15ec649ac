"""Google News RSS search per dashboard topic."""

from __future__ import annotations

import asyncio
import html
import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, List, Optional, Sequence

import httpx

from core.watchlist import NEWS_TOPICS, NewsTopic
from utils.http_client import use_client
from utils.logger import get_logger
from utils.settings import get_settings

from .cache import fetch_text
from .models import NewsItem, NewsSection

logger = get_logger(__name__)

ITEM_PATTERN = re.compile(r"<item>[\s\S]*?</item>")
UNTITLED = "(无标题)"
DEFAULT_LINK = "#"
DEFAULT_SOURCE = "Google News"


def strip_cdata(text: str) -> str:
    return text.replace("<![CDATA[", "", 1).replace("]]>", "", 1).strip()


def find_all(tag: str, xml: str) -> List[str]:
    """
    Return the text of every ``<tag>`` element in ``xml``, in document order.
    """
    name = re.escape(tag)
    pattern = re.compile(rf"<{name}(?:\s[^>]*)?>([\s\S]*?)</{name}>")
    return [_element_text(match.group(1)) for match in pattern.finditer(xml)]


def _element_text(raw: str) -> str:
    # CDATA content is literal; only bare text carries entities.
    if "<![CDATA[" in raw:
        return strip_cdata(raw)
    return html.unescape(strip_cdata(raw))


def _first(tag: str, block: str, default: str) -> str:
    values = find_all(tag, block)
    return values[0] if values and values[0] else default


def parse_published(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        published = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if published is None:
        return None
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published


def parse_items(
    xml: str,
    now: Optional[datetime] = None,
    window: timedelta = timedelta(hours=24),
    limit: int = 6,
) -> List[NewsItem]:
    """
    Turn an RSS document into at most ``limit`` items published within ``window`` of ``now``.

    Items whose pubDate cannot be parsed are kept.
    """
    current = now or datetime.now(timezone.utc)
    items: List[NewsItem] = []

    for block in ITEM_PATTERN.findall(xml):
        if len(items) >= limit:
            break
        pub_date = _first("pubDate", block, "")
        published = parse_published(pub_date)
        if published is not None and current - published > window:
            continue

        items.append(
            NewsItem(
                title=_first("title", block, UNTITLED),
                link=_first("link", block, DEFAULT_LINK),
                source=_first("source", block, DEFAULT_SOURCE),
                published_at=pub_date,
            )
        )

    return items


def build_feed_params(query: str) -> Dict[str, str]:
    settings = get_settings()
    return {
        "q": f"{query} when:1d",
        "hl": settings.news_language,
        "gl": settings.news_region,
        "ceid": settings.news_edition,
    }


def build_feed_url(query: str) -> str:
    settings = get_settings()
    return str(httpx.URL(str(settings.google_news_url), params=build_feed_params(query)))


async def fetch_google_news(query: str, client: Optional[httpx.AsyncClient] = None) -> List[NewsItem]:
    """Fetch the last day's headlines for ``query``; any failure yields an empty list."""

    settings = get_settings()
    url = build_feed_url(query)

    async with use_client(client) as http:
        try:
            xml = await fetch_text(http, url, ttl=settings.news_cache_ttl)
        except httpx.HTTPStatusError as exc:
            logger.warning("Google News returned HTTP %s for %r", exc.response.status_code, query)
            return []
        except httpx.HTTPError as exc:
            logger.warning("Google News request failed for %r: %s", query, exc)
            return []

    items = parse_items(
        xml,
        window=timedelta(hours=settings.news_window_hours),
        limit=settings.news_max_items,
    )
    logger.debug("Parsed %s items for %r", len(items), query)
    return items


async def fetch_news_sections(
    topics: Sequence[NewsTopic] = NEWS_TOPICS,
    client: Optional[httpx.AsyncClient] = None,
) -> List[NewsSection]:
    async with use_client(client) as http:
        results = await asyncio.gather(*(fetch_google_news(topic.query, client=http) for topic in topics))

    return [
        NewsSection(title=topic.title, query=topic.query, items=items)
        for topic, items in zip(topics, results)
    ]
