import logging
import re
from typing import AsyncIterator, Optional
from urllib.parse import urlparse

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CATEGORIES, Config, is_category, load_config
from .fetcher import AsyncFetcher, TransportError
from .service import fetch_document, fetch_feed
from .utils import is_http_url

logger = logging.getLogger(__name__)

TOPIC_ID_RE = re.compile(r"^\d+$")


def get_config() -> Config:
    return load_config()


async def get_fetcher(config: Config = Depends(get_config)) -> AsyncIterator[AsyncFetcher]:
    fetcher = AsyncFetcher(timeout=config.http_timeout)
    try:
        yield fetcher
    finally:
        await fetcher.close()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _is_valid_target(target: Optional[str]) -> bool:
    if not target:
        return False
    if is_http_url(target):
        try:
            urlparse(target).hostname
        except ValueError:
            return False
        return True
    return target.startswith("/") and not target.startswith("//")


async def _read(target: str, request: Request, config: Config, fetcher: AsyncFetcher) -> JSONResponse:
    effective = config.with_overrides(request.headers)
    try:
        doc = await fetch_document(target, effective, fetcher)
    except TransportError as e:
        logger.error("[API Reader Error] %s: %s", target, e)
        return _error(str(e), 502)
    return JSONResponse(doc.to_dict(), headers={"Cache-Control": "public, max-age=3600"})


def create_app() -> FastAPI:
    app = FastAPI(title="Linux DO Reader API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/api/categories")
    def list_categories():
        return [{"id": c.id, "name": c.name, "file": c.file} for c in CATEGORIES]

    @app.get("/api/jina")
    async def read_document(
        request: Request,
        url: Optional[str] = None,
        config: Config = Depends(get_config),
        fetcher: AsyncFetcher = Depends(get_fetcher),
    ):
        if not _is_valid_target(url):
            return _error("Invalid URL", 400)
        return await _read(url, request, config, fetcher)

    @app.get("/api/topic/{topic_id}")
    async def read_topic(
        topic_id: str,
        request: Request,
        config: Config = Depends(get_config),
        fetcher: AsyncFetcher = Depends(get_fetcher),
    ):
        if not TOPIC_ID_RE.match(topic_id):
            return _error("Invalid Topic ID", 400)
        return await _read(f"/t/topic/{topic_id}", request, config, fetcher)

    @app.get("/api/feed/{category_id}")
    async def read_feed(
        category_id: str,
        request: Request,
        config: Config = Depends(get_config),
        fetcher: AsyncFetcher = Depends(get_fetcher),
    ):
        if not is_category(category_id):
            return _error("Category not found", 404)
        effective = config.with_overrides(request.headers)
        try:
            items = await fetch_feed(category_id, effective, fetcher)
        except TransportError as e:
            logger.error("[Category Error] %s: %s", category_id, e)
            return _error(str(e), 502)
        return {"category": category_id, "items": [item.to_dict() for item in items]}

    return app


app = create_app()
