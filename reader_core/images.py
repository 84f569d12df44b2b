import re
from urllib.parse import urlencode

from .utils import escape_html, normalize_base_url

PLACEHOLDER_GIF = "data:image/gif;base64,R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"

IMAGE_EXT_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg|bmp|ico)$", re.I)
HTML_IMG_RE = re.compile(r"""<img\s+[^>]*src=["']([^"']+)["'][^>]*>""", re.I)
MD_IMG_RE = re.compile(r"!\[(.*?)\]\((.*?)\)")
MD_TITLE_SPLIT_RE = re.compile(r"""\s+['"](.*?)['"]?$""")

UPLOADS_MARKER = "linux.do/uploads"


def proxify_image(url: str, token: str, base_url: str) -> str:
    """Routes image URLs through the scrape proxy (webp, q85) when a token is configured."""
    if not token or not url:
        return url
    if IMAGE_EXT_RE.search(url) or UPLOADS_MARKER in url:
        params = urlencode({"token": token, "url": url, "format": "webp", "quality": "85"})
        return f"{normalize_base_url(base_url)}/?{params}"
    return url


def lazy_html_images(html: str, token: str, base_url: str) -> str:
    """Swaps each <img src> for a placeholder and moves the real URL to data-src."""
    if not html:
        return html

    def repl(match: re.Match) -> str:
        tag, src = match.group(0), match.group(1)
        real_url = proxify_image(src, token, base_url)
        tag = tag.replace(src, PLACEHOLDER_GIF, 1)
        return tag.replace("<img", f'<img data-src="{escape_html(real_url)}" class="lazy" loading="lazy"', 1)

    return HTML_IMG_RE.sub(repl, html)


def lazy_markdown_images(md: str, token: str, base_url: str) -> str:
    """Turns ![alt](src "title") into a lazy-loading <img> tag."""
    if not md:
        return md

    def repl(match: re.Match) -> str:
        alt, src = match.group(1), match.group(2).strip()
        title = ""
        title_match = MD_TITLE_SPLIT_RE.search(src)
        if title_match:
            title = title_match.group(1)
            src = src[:title_match.start()]
        real_url = proxify_image(src, token, base_url)
        title_attr = f' title="{escape_html(title)}"' if title else ""
        return (
            f'<img alt="{escape_html(alt)}" src="{PLACEHOLDER_GIF}" data-src="{escape_html(real_url)}"'
            f' class="lazy" loading="lazy"{title_attr}>'
        )

    return MD_IMG_RE.sub(repl, md)
