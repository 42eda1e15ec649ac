from functools import lru_cache

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    news_cache_ttl: int = Field(default=1800, validation_alias="NEWS_CACHE_TTL")
    quote_cache_ttl: int = Field(default=900, validation_alias="QUOTE_CACHE_TTL")
    page_cache_ttl: int = Field(default=1800, validation_alias="PAGE_CACHE_TTL")
    refresh_in_background: bool = Field(default=False, validation_alias="REFRESH_IN_BACKGROUND")

    news_window_hours: int = Field(default=24, validation_alias="NEWS_WINDOW_HOURS")
    news_max_items: int = Field(default=6, validation_alias="NEWS_MAX_ITEMS")
    news_language: str = Field(default="zh-CN", validation_alias="NEWS_LANGUAGE")
    news_region: str = Field(default="CN", validation_alias="NEWS_REGION")
    news_edition: str = Field(default="CN:zh-Hans", validation_alias="NEWS_EDITION")
    google_news_url: AnyHttpUrl = Field(
        default="https://news.google.com/rss/search",
        validation_alias="GOOGLE_NEWS_URL",
    )
    yahoo_chart_url: AnyHttpUrl = Field(
        default="https://query1.finance.yahoo.com/v8/finance/chart",
        validation_alias="YAHOO_CHART_URL",
    )

    http_timeout: float = Field(default=10.0, validation_alias="HTTP_TIMEOUT")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, validation_alias="USER_AGENT")
    display_timezone: str = Field(default="Asia/Shanghai", validation_alias="DISPLAY_TIMEZONE")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
