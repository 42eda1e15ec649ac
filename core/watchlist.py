from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class NewsTopic:
    """A dashboard news card and the Google News query behind it."""

    title: str
    query: str


@dataclass(frozen=True)
class WatchSymbol:
    symbol: str
    name: str
    currency: str


NEWS_TOPICS: Tuple[NewsTopic, ...] = (
    NewsTopic(title="技术突破", query="AI breakthrough"),
    NewsTopic(title="产品范式", query="AI product launch"),
    NewsTopic(title="国内外大厂动作", query="OpenAI Google Microsoft Meta Baidu Alibaba AI"),
    NewsTopic(title="代理式 AI", query="AI agents agentic"),
    NewsTopic(title="推理成本与 Token 经济", query="LLM inference cost token economics"),
    NewsTopic(title="AI-UX", query="AI UX design"),
    NewsTopic(title="商业 ROI", query="AI ROI enterprise"),
)

WATCHLIST: Tuple[WatchSymbol, ...] = (
    WatchSymbol(symbol="NVDA", name="NVIDIA", currency="USD"),
    WatchSymbol(symbol="MSFT", name="Microsoft", currency="USD"),
    WatchSymbol(symbol="GOOGL", name="Alphabet", currency="USD"),
    WatchSymbol(symbol="002230.SZ", name="科大讯飞", currency="CNY"),
    WatchSymbol(symbol="300308.SZ", name="中际旭创", currency="CNY"),
    WatchSymbol(symbol="688111.SH", name="金山办公", currency="CNY"),
    WatchSymbol(symbol="600570.SH", name="恒生电子", currency="CNY"),
    WatchSymbol(symbol="002415.SZ", name="海康威视", currency="CNY"),
)


def yahoo_symbol(symbol: str) -> str:
    """Yahoo lists Shanghai shares as ``.SS``; the watchlist uses the exchange's ``.SH``."""
    normalized = symbol.strip().upper()
    if normalized.endswith(".SH"):
        return normalized[: -len(".SH")] + ".SS"
    return normalized
