import argparse
import asyncio
import json
import sys

from .config import DEFAULT_HOST, DEFAULT_PORT, load_config
from .fetcher import AsyncFetcher, TransportError
from .service import fetch_document, fetch_feed
from .utils import setup_logging


def _dump(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


async def _feed(category: str) -> int:
    config = load_config()
    async with AsyncFetcher(timeout=config.http_timeout) as fetcher:
        try:
            items = await fetch_feed(category, config, fetcher)
        except TransportError as e:
            _dump({"error": str(e)})
            return 1
    _dump([item.to_dict() for item in items])
    return 0


async def _read(target: str) -> int:
    config = load_config()
    async with AsyncFetcher(timeout=config.http_timeout) as fetcher:
        try:
            doc = await fetch_document(target, config, fetcher)
        except TransportError as e:
            _dump({"error": str(e)})
            return 1
    _dump(doc.to_dict())
    return 0


def _serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("reader_core.server:app", host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linuxdo-reader")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    feed = sub.add_parser("feed", help="list topics of a category feed")
    feed.add_argument("category", nargs="?", default="latest")

    read = sub.add_parser("read", help="fetch one page through the reader service")
    read.add_argument("target", help="absolute URL or a path on the forum, e.g. /t/topic/1")

    serve = sub.add_parser("serve", help="run the JSON API")
    serve.add_argument("--host", default=DEFAULT_HOST)
    serve.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    if args.command == "feed":
        return asyncio.run(_feed(args.category))
    if args.command == "read":
        return asyncio.run(_read(args.target))
    return _serve(args.host, args.port)


if __name__ == "__main__":
    sys.exit(main())
