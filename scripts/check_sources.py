"""Diagnostic script for upstream reachability of the dashboard's data sources."""

import sys
from pathlib import Path

import requests

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.watchlist import NEWS_TOPICS, WATCHLIST  # noqa: E402
from services.news import build_feed_url  # noqa: E402
from services.stocks import build_chart_url  # noqa: E402
from utils.settings import get_settings  # noqa: E402


def _headers() -> dict:
    return {"User-Agent": get_settings().user_agent}


def check_google_news() -> None:
    topic = NEWS_TOPICS[0]
    url = build_feed_url(topic.query)
    print(f"\n[Google News] {topic.title}: {url}")
    try:
        response = requests.get(url, headers=_headers(), timeout=10)
        print(f"[Google News] Response: {response.status_code} → {response.reason}")
        if response.status_code == 200:
            print(f"✅ Feed reachable ({response.text.count('<item>')} items).")
        else:
            print(f"⚠️ Google News returned: {response.status_code}")
    except requests.exceptions.RequestException as exc:
        print(f"🔥 Google News connection error: {exc}")


def check_yahoo_chart() -> None:
    item = WATCHLIST[0]
    url = build_chart_url(item.symbol)
    print(f"\n[Yahoo] {item.symbol}: {url}")
    try:
        response = requests.get(url, headers=_headers(), timeout=10)
        print(f"[Yahoo] Response: {response.status_code} → {response.reason}")
        if response.status_code == 200:
            print("✅ Chart endpoint reachable.")
        elif response.status_code == 429:
            print("🚫 Yahoo rate limited this client.")
        else:
            print(f"⚠️ Yahoo returned: {response.status_code}")
    except requests.exceptions.RequestException as exc:
        print(f"🔥 Yahoo connection error: {exc}")


def main() -> None:
    check_google_news()
    check_yahoo_chart()


if __name__ == "__main__":
    main()
