from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class NewsItem(BaseModel):
    title: str
    link: str
    source: str
    published_at: str = Field(default="", description="Raw pubDate text from the feed")


class NewsSection(BaseModel):
    title: str
    query: str
    items: List[NewsItem] = Field(default_factory=list)


class StockQuote(BaseModel):
    symbol: str
    name: str
    currency: str
    price: Optional[float] = None
    previous_close: Optional[float] = None
    change_pct: Optional[float] = None


class DashboardSnapshot(BaseModel):
    generated_at: datetime
    sections: List[NewsSection]
    stocks: List[StockQuote]
    brief: str = ""
