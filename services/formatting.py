"""Display strings for quotes and the copyable Markdown brief."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional

import pytz

from .models import NewsSection, StockQuote

EMPTY_VALUE = "--"
BRIEF_TITLE = "AI 24h Radar 简报"
STOCKS_HEADING = "AI 概念股 24h 涨跌幅"
NO_ITEMS = "暂无可用数据"
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

CURRENCY_SYMBOLS = {"USD": "$"}
DEFAULT_CURRENCY_SYMBOL = "¥"


def fmt_pct(pct: Optional[float]) -> str:
    if pct is None:
        return EMPTY_VALUE
    sign = "+" if pct > 0 else ""
    return f"{sign}{pct:.2f}%"


def fmt_price(price: Optional[float], currency: str) -> str:
    if price is None:
        return EMPTY_VALUE
    return f"{CURRENCY_SYMBOLS.get(currency, DEFAULT_CURRENCY_SYMBOL)}{price:.2f}"


def pct_tone(pct: Optional[float]) -> str:
    """Classify a change as ``up``, ``down``, ``flat`` or ``none`` (no data)."""
    if pct is None:
        return "none"
    if pct > 0:
        return "up"
    if pct < 0:
        return "down"
    return "flat"


def fmt_timestamp(value: datetime, tz_name: str = "Asia/Shanghai") -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(pytz.timezone(tz_name)).strftime(TIMESTAMP_FORMAT)


def _stock_lines(stocks: Iterable[StockQuote]) -> List[str]:
    return [
        f"- {stock.name} ({stock.symbol})：{fmt_price(stock.price, stock.currency)} ({fmt_pct(stock.change_pct)})"
        for stock in stocks
    ]


def _section_lines(section: NewsSection) -> List[str]:
    if not section.items:
        return [f"- {NO_ITEMS}"]
    return [f"- [{item.title}]({item.link}) · {item.source}" for item in section.items]


def build_brief(
    sections: Iterable[NewsSection],
    stocks: Iterable[StockQuote],
    generated_at: datetime,
    tz_name: str = "Asia/Shanghai",
) -> str:
    """
    Compose the Markdown brief offered for copying on the dashboard.

    Stocks come first, then one heading per news topic; empty topics get a placeholder line.
    """
    blocks: List[List[str]] = [
        [f"# {BRIEF_TITLE}", f"更新时间：{fmt_timestamp(generated_at, tz_name)}"],
        [f"## {STOCKS_HEADING}", *_stock_lines(stocks)],
    ]
    for section in sections:
        blocks.append([f"## {section.title}", *_section_lines(section)])

    return "\n\n".join("\n".join(lines) for lines in blocks) + "\n"
