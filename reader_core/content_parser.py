import re

from .config import UNTITLED
from .model import ExtractedDocument

MARKDOWN_ANCHOR = "Markdown Content:"

TITLE_RE = re.compile(r"^Title: ([^\r\n]+)", re.M)
DATE_RE = re.compile(r"^Published Time: ([^\r\n]+)", re.M)
URL_RE = re.compile(r"^URL Source: ([^\r\n]+)", re.M)


def _first_line_value(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1) if match else ""


def extract_markdown(text: str) -> str:
    """Everything after the anchor, trimmed. Without the anchor, the raw text as-is."""
    idx = text.find(MARKDOWN_ANCHOR)
    if idx == -1:
        return text
    return text[idx + len(MARKDOWN_ANCHOR):].strip()


def parse_content_response(text: bytes | str | None, requested: str = "") -> ExtractedDocument:
    """
    Splits a reader-service response into title/date/url/markdown.

    The header lines and the markdown body are located independently, so a
    response without the markdown anchor still yields whatever header lines
    it carries. Missing parts fall back to UNTITLED, "", the requested
    identifier and the full raw text respectively.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="ignore")
    text = text or ""

    return ExtractedDocument(
        title=_first_line_value(TITLE_RE, text) or UNTITLED,
        date=_first_line_value(DATE_RE, text),
        url=_first_line_value(URL_RE, text) or requested,
        markdown=extract_markdown(text),
    )
