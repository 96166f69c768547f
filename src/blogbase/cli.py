from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

from .api import call_api
from .bootstrap import configure_logging
from .config import get_settings
from .gateway import BackendGateway

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="blogbase command line interface.")
    parser.add_argument("--log-level", default=None, help="Override BLOGBASE_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve the gateway over HTTP for front-end pages.")
    serve_parser.add_argument("--host", default=settings.server.host)
    serve_parser.add_argument("--port", type=int, default=settings.server.port)

    subparsers.add_parser("posts", help="Print all posts, newest first.")

    comments_parser = subparsers.add_parser("comments", help="Print the comments of a post.")
    comments_parser.add_argument("post_id", type=int)

    upload_parser = subparsers.add_parser("upload", help="Upload an image and print its public URL.")
    upload_parser.add_argument("path", type=Path)
    upload_parser.add_argument("--email", default=None)
    upload_parser.add_argument("--password", default=None)

    return parser


def _emit(payload: Any) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")


async def _upload(gateway: BackendGateway, path: Path, email: str | None, password: str | None) -> int:
    if email and password:
        login = await call_api("login", gateway, email=email, password=password)
        if not login["success"]:
            _emit(login)
            return 1
    result = await gateway.upload_file_and_get_url(path)
    _emit({"url": result.value.public_url if result.ok and result.value else None})
    return 0 if result.ok else 1


async def _run(args: argparse.Namespace, gateway: BackendGateway) -> int:
    if args.command == "posts":
        _emit(await call_api("fetch_posts", gateway))
        return 0
    if args.command == "comments":
        _emit(await call_api("fetch_comments", gateway, post_id=args.post_id))
        return 0
    if args.command == "upload":
        return await _upload(gateway, args.path, args.email, args.password)
    raise ValueError(f"Unknown command: {args.command}")


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(level=args.log_level)
    logger.info("blogbase CLI starting")

    gateway = BackendGateway.from_settings()
    if args.command == "serve":
        from .services.http import run_local_server

        run_local_server(gateway, host=args.host, port=args.port)
        return
    sys.exit(asyncio.run(_run(args, gateway)))


if __name__ == "__main__":
    main()
