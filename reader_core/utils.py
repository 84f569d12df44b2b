import logging
import re

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Order matters: "&amp;" must come last so "&amp;lt;" decodes to "&lt;", not "<".
_UNESCAPE_TABLE = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#039;", "'"),
    ("&amp;", "&"),
)

_ESCAPE_TABLE = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
HTTP_URL_RE = re.compile(r"^https?://[^\s/?#]+", re.I)


def setup_logging(level: int | str = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def unescape_html(value: str | None) -> str:
    """Reverses the five entities RSS producers emit. Anything else is left alone."""
    if not value:
        return ""
    for entity, char in _UNESCAPE_TABLE:
        value = value.replace(entity, char)
    return value


def escape_html(value: str | None) -> str:
    if not value:
        return ""
    for char, entity in _ESCAPE_TABLE:
        value = value.replace(char, entity)
    return value


def normalize_base_url(base_url: str) -> str:
    """Strips a single trailing slash."""
    if base_url.endswith("/"):
        return base_url[:-1]
    return base_url


def has_scheme(value: str) -> bool:
    return bool(SCHEME_RE.match(value or ""))


def is_http_url(value: str | None) -> bool:
    return bool(value and HTTP_URL_RE.match(value.strip()))
