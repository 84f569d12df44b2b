import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Mapping, Optional

from .model import Category

# Fetcher Settings
DEFAULT_USER_AGENT = "LinuxDOReader/2.0"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
HTTP_TIMEOUT = 30

# Upstream Sources
DEFAULT_RSS_BASE_URL = "https://linuxdorss.longpink.com"
DEFAULT_READER_BASE_URL = "https://r.jina.ai"
READER_SERVICE_DOMAIN = "jina.ai"
DEFAULT_CONTENT_ORIGIN = "https://linux.do"
DEFAULT_SCRAPE_BASE_URL = "https://api.scrape.do"

# Fallback Values
DEFAULT_CREATOR = "Linux Do"
UNTITLED = "无标题"

# Server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

CATEGORIES = [
    Category("latest", "最新话题", "latest.xml"),
    Category("top", "热门话题", "top.xml"),
    Category("develop", "开发调优", "develop.xml"),
    Category("resource", "资源荟萃", "resource.xml"),
    Category("wiki", "文档共建", "wiki.xml"),
    Category("welfare", "福利羊毛", "welfare.xml"),
    Category("gossip", "搞七捻三", "gossip.xml"),
    Category("news", "前沿快讯", "news.xml"),
    Category("reading", "读书成诗", "reading.xml"),
    Category("job", "非我莫属", "job.xml"),
    Category("trade", "跳蚤市场", "trade.xml"),
    Category("feedback", "运营反馈", "feedback.xml"),
]


def get_category(category_id: str) -> Category:
    """Unknown ids fall back to the first (latest) category."""
    for category in CATEGORIES:
        if category.id == category_id:
            return category
    return CATEGORIES[0]


def is_category(category_id: str) -> bool:
    return any(c.id == category_id for c in CATEGORIES)


# Request header -> Config field. Both the short and the long header names are accepted.
HEADER_OVERRIDES = {
    "x-base": "reader_base_url",
    "x-jina-base": "reader_base_url",
    "x-key": "reader_api_key",
    "x-jina-key": "reader_api_key",
    "x-rss-base": "rss_base_url",
    "x-scrape-base": "scrape_base_url",
    "x-scrape-token": "scrape_token",
}


@dataclass(frozen=True)
class Config:
    rss_base_url: str = DEFAULT_RSS_BASE_URL
    reader_base_url: str = DEFAULT_READER_BASE_URL
    reader_api_key: str = ""
    scrape_base_url: str = DEFAULT_SCRAPE_BASE_URL
    scrape_token: str = ""
    http_timeout: float = HTTP_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if environ is None else environ
        return cls(
            rss_base_url=env.get("RSS_BASE_URL", DEFAULT_RSS_BASE_URL),
            reader_base_url=env.get("JINA_BASE_URL", DEFAULT_READER_BASE_URL),
            reader_api_key=env.get("JINA_API_KEY", ""),
            scrape_base_url=env.get("SCRAPE_BASE_URL", DEFAULT_SCRAPE_BASE_URL),
            scrape_token=env.get("SCRAPE_TOKEN", ""),
            http_timeout=float(env.get("HTTP_TIMEOUT", HTTP_TIMEOUT)),
        )

    def with_overrides(self, headers: Optional[Mapping[str, str]]) -> "Config":
        """
        Returns a copy with per-request header overrides applied.
        Empty header values are ignored; self is never modified.
        """
        if not headers:
            return self
        changes = {}
        for header, field_name in HEADER_OVERRIDES.items():
            value = (headers.get(header) or "").strip()
            if value:
                changes[field_name] = value
        return replace(self, **changes) if changes else self


@lru_cache(maxsize=1)
def load_config() -> Config:
    return Config.from_env()
