import httpx
import pytest

from reader_core.config import Config
from reader_core.fetcher import AsyncFetcher

SAMPLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
<channel>
<title>Linux DO - Latest</title>
<item>
  <title>First &amp; foremost</title>
  <link>https://linux.do/t/topic/101</link>
  <description><![CDATA[<p>Hello <img src="https://linux.do/uploads/a.png"> &amp; bye</p>]]></description>
  <pubDate>Mon, 01 Jan 2024 10:00:00 +0000</pubDate>
  <dc:creator><![CDATA[alice]]></dc:creator>
</item>
<item>
  <title>No link here</title>
  <description>nothing</description>
</item>
<item>
  <title>Second</title>
  <link>  https://linux.do/t/some-slug/202/3  </link>
  <description>&lt;b&gt;bold&lt;/b&gt;</description>
  <pubDate>not a date</pubDate>
</item>
</channel>
</rss>
"""

SAMPLE_READER_RESPONSE = """Title: Hello World
URL Source: https://linux.do/t/topic/5
Published Time: 2024-05-01T08:00:00Z

Markdown Content:

# Hello

Some text.
"""


@pytest.fixture
def config():
    return Config(
        rss_base_url="https://rss.example.com/",
        reader_base_url="https://r.jina.ai",
        reader_api_key="",
        scrape_base_url="https://proxy.example.com/",
        scrape_token="",
        http_timeout=5,
    )


@pytest.fixture
def make_fetcher():
    def _make(handler):
        return AsyncFetcher(timeout=5, transport=httpx.MockTransport(handler))
    return _make


def text_response(body: str, status_code: int = 200, content_type: str = "text/plain; charset=utf-8") -> httpx.Response:
    return httpx.Response(status_code, content=body.encode("utf-8"), headers={"content-type": content_type})
