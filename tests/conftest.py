"""
Pytest Configuration and Fixtures
"""

import json
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Callable, Dict, Optional

import httpx
import pytest

from services import cache, dashboard

NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


def rss_item(
    title: Optional[str] = "Headline",
    link: Optional[str] = "https://example.com/a",
    published: Optional[datetime] = None,
    source: Optional[str] = "Example Wire",
) -> str:
    """Render one Google News style ``<item>`` block; ``None`` omits the tag."""
    parts = ["<item>"]
    if title is not None:
        parts.append(f"<title><![CDATA[{title}]]></title>")
    if link is not None:
        parts.append(f"<link>{link}</link>")
    if published is not None:
        parts.append(f"<pubDate>{format_datetime(published)}</pubDate>")
    if source is not None:
        parts.append(f'<source url="https://example.com">{source}</source>')
    parts.append("</item>")
    return "".join(parts)


def rss_document(*items: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        "<rss version=\"2.0\"><channel><title>Google News</title>"
        "<link>https://news.google.com</link>"
        + "".join(items)
        + "</channel></rss>"
    )


def chart_payload(*closes) -> Dict:
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": "TEST"},
                    "indicators": {"quote": [{"close": list(closes)}]},
                }
            ],
            "error": None,
        }
    }


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def recent():
    """An hour before the wall clock, for code paths that read the current time."""
    return datetime.now(timezone.utc) - timedelta(hours=1)


@pytest.fixture(autouse=True)
def clear_caches():
    """Keep response and snapshot caches from leaking between tests."""
    cache.RESPONSE_CACHE.clear()
    dashboard.SNAPSHOT_CACHE.clear()
    dashboard._REBUILD_LOCK = None
    yield
    cache.RESPONSE_CACHE.clear()
    dashboard.SNAPSHOT_CACHE.clear()
    dashboard._REBUILD_LOCK = None


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def upstream_handler(recent):
    """Answer Google News with one fresh headline per query and Yahoo with two closes."""

    calls = {"news": 0, "chart": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "news.google.com":
            calls["news"] += 1
            query = request.url.params["q"]
            body = rss_document(rss_item(title=f"{query} headline", published=recent))
            return httpx.Response(200, text=body)
        if request.url.host == "query1.finance.yahoo.com":
            calls["chart"] += 1
            return httpx.Response(200, text=json.dumps(chart_payload(100.0, 102.0)))
        return httpx.Response(404)

    handler.calls = calls
    return handler
