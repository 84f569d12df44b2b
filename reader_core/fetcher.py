import logging
from typing import Optional

import httpx

from .config import DEFAULT_ACCEPT, DEFAULT_USER_AGENT, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """The upstream answered with a non-success status or could not be reached."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class AsyncFetcher:
    """Single-shot text fetcher on top of httpx. No caching, no retries."""

    def __init__(self, timeout: float = HTTP_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            headers={"User-Agent": DEFAULT_USER_AGENT, "Accept": DEFAULT_ACCEPT},
        )

    async def __aenter__(self) -> "AsyncFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self):
        await self.client.aclose()

    async def fetch_text(
        self, url: str, headers: Optional[dict[str, str]] = None, timeout: Optional[float] = None
    ) -> str:
        """
        GETs url and returns the decoded body. timeout overrides the client default for this call.
        Raises TransportError on network failure, non-2xx status, or a non-text body.
        """
        try:
            if timeout is None:
                resp = await self.client.get(url, headers=headers or {})
            else:
                resp = await self.client.get(url, headers=headers or {}, timeout=timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("[Proxy Error] %s: %s", url, e)
            raise TransportError(f"Request failed: {e}", url=url) from e

        if not resp.is_success:
            logger.error("[Proxy Error] %s: HTTP %s", url, resp.status_code)
            raise TransportError(
                f"HTTP {resp.status_code}: {resp.reason_phrase}",
                url=url,
                status_code=resp.status_code,
            )

        content_type = resp.headers.get("content-type", "")
        if "text" not in content_type and "xml" not in content_type:
            logger.error("[Proxy Error] %s: non-text response (%s)", url, content_type or "no content-type")
            raise TransportError("Non-text response", url=url, status_code=resp.status_code)

        return resp.text
