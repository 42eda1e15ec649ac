"""
Service layer for the news and quote upstreams behind the dashboard.
"""

from .dashboard import build_dashboard, get_dashboard, refresh_dashboard
from .news import fetch_google_news, fetch_news_sections
from .stocks import fetch_stock, fetch_stocks

__all__ = [
    "build_dashboard",
    "fetch_google_news",
    "fetch_news_sections",
    "fetch_stock",
    "fetch_stocks",
    "get_dashboard",
    "refresh_dashboard",
]
