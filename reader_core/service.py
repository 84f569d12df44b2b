import logging
from dataclasses import replace
from urllib.parse import urlparse

from .config import DEFAULT_CONTENT_ORIGIN, READER_SERVICE_DOMAIN, Config, get_category
from .content_parser import parse_content_response
from .feed_parser import parse_items
from .fetcher import AsyncFetcher
from .images import lazy_html_images, lazy_markdown_images
from .model import ExtractedDocument, FeedItem
from .utils import has_scheme, normalize_base_url

logger = logging.getLogger(__name__)


def _hostname(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def _is_reader_host(url: str, config: Config) -> bool:
    host = _hostname(url)
    if not host:
        return False
    if host == READER_SERVICE_DOMAIN or host.endswith("." + READER_SERVICE_DOMAIN):
        return True
    return host == _hostname(config.reader_base_url)


def resolve_reader_url(target: str, config: Config) -> str:
    """
    Maps a caller-supplied target to the reader-service URL to fetch:
      - absolute URL on the reader service itself -> unchanged
      - any other absolute URL -> <reader base>/<url>
      - bare path -> <reader base>/<content origin><path>
    """
    base = normalize_base_url(config.reader_base_url)
    if has_scheme(target):
        if _is_reader_host(target, config):
            return target
        return f"{base}/{target}"
    path = target if target.startswith("/") else "/" + target
    return f"{base}/{DEFAULT_CONTENT_ORIGIN}{path}"


def reader_headers(config: Config) -> dict[str, str]:
    headers: dict[str, str] = {}
    if config.reader_api_key:
        headers["Authorization"] = f"Bearer {config.reader_api_key}"
    return headers


async def fetch_document(target: str, config: Config, fetcher: AsyncFetcher) -> ExtractedDocument:
    """One reader-service round trip. TransportError propagates untouched."""
    api_url = resolve_reader_url(target, config)
    logger.info("[Reader] Fetching: %s", api_url)
    text = await fetcher.fetch_text(api_url, reader_headers(config), timeout=config.http_timeout)

    doc = parse_content_response(text, target)
    markdown = lazy_markdown_images(doc.markdown, config.scrape_token, config.scrape_base_url)
    return replace(doc, markdown=markdown)


def feed_url(category_id: str, config: Config) -> str:
    category = get_category(category_id)
    return f"{normalize_base_url(config.rss_base_url)}/{category.file}"


async def fetch_feed(category_id: str, config: Config, fetcher: AsyncFetcher) -> list[FeedItem]:
    rss_url = feed_url(category_id, config)
    logger.info("[RSS] Fetching: %s", rss_url)
    xml = await fetcher.fetch_text(rss_url, timeout=config.http_timeout)

    items = parse_items(xml)
    logger.debug("[RSS] %d items from %s", len(items), rss_url)
    return [
        replace(
            item,
            description_html=lazy_html_images(item.description_html, config.scrape_token, config.scrape_base_url),
        )
        for item in items
    ]
