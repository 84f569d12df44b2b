import re

from .config import DEFAULT_CREATOR
from .model import FeedItem
from .utils import unescape_html

ITEM_RE = re.compile(r"<item>([\s\S]*?)</item>")
TOPIC_ID_RE = re.compile(r"/topic/(\d+)")

FIELD_TAGS = ("title", "link", "description", "pubDate", "dc:creator")


def _cdata_pattern(tag: str) -> re.Pattern:
    tag = re.escape(tag)
    return re.compile(rf"<{tag}>\s*<!\[CDATA\[([\s\S]*?)\]\]>\s*</{tag}>", re.I)


def _plain_pattern(tag: str) -> re.Pattern:
    tag = re.escape(tag)
    return re.compile(rf"<{tag}>([\s\S]*?)</{tag}>", re.I)


_PATTERNS = {tag: (_cdata_pattern(tag), _plain_pattern(tag)) for tag in FIELD_TAGS}


def extract_field(fragment: str, tag: str) -> str:
    """
    Returns the inner text of the first <tag>...</tag> in fragment.
    CDATA content comes back verbatim; plain content is entity-decoded once.
    Returns "" when the tag is absent.
    """
    if not fragment or not tag:
        return ""
    cdata_re, plain_re = _PATTERNS.get(tag) or (_cdata_pattern(tag), _plain_pattern(tag))

    match = cdata_re.search(fragment)
    if match:
        return match.group(1)

    match = plain_re.search(fragment)
    if match:
        return unescape_html(match.group(1))
    return ""


def extract_topic_id(link: str) -> str:
    match = TOPIC_ID_RE.search(link or "")
    return match.group(1) if match else ""


def parse_item(fragment: str) -> FeedItem | None:
    """Builds one FeedItem, or None when the link or topic id is missing."""
    link = extract_field(fragment, "link").strip()
    topic_id = extract_topic_id(link)
    if not link or not topic_id:
        return None

    return FeedItem(
        title=extract_field(fragment, "title"),
        link=link,
        topic_id=topic_id,
        description_html=extract_field(fragment, "description"),
        pub_date=extract_field(fragment, "pubDate"),
        creator=extract_field(fragment, "dc:creator") or DEFAULT_CREATOR,
    )


def parse_items(payload: bytes | str | None) -> list[FeedItem]:
    """Scans <item> blocks in document order and keeps the valid ones."""
    if not payload:
        return []
    if isinstance(payload, bytes):
        text = payload.decode("utf-8", errors="ignore")
    else:
        text = payload

    items: list[FeedItem] = []
    for match in ITEM_RE.finditer(text):
        item = parse_item(match.group(1))
        if item is not None:
            items.append(item)
    return items
