"""List every published route for static pre-rendering.

Usage: kontent-static-routes [--locale en --locale ro] [--no-blog] [--plain]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import TYPE_CHECKING

from kontent_site.config import Settings
from kontent_site.exceptions import RepositoryError
from kontent_site.repository.clients import RepositoryClients
from kontent_site.services.locale_service import LOCALES
from kontent_site.services.route_service import StaticRoute, enumerate_static_routes

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

logger = logging.getLogger(__name__)


def format_routes(routes: Sequence[StaticRoute], *, plain: bool) -> str:
    if plain:
        return "\n".join(route.path for route in routes)
    return json.dumps([asdict(route) for route in routes], indent=2)


async def collect_routes(
    settings: Settings,
    locales: Sequence[str],
    *,
    include_blog: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[StaticRoute]:
    """Enumerate routes with a short-lived set of repository clients."""
    clients = RepositoryClients.from_settings(settings, transport=transport)
    try:
        return await enumerate_static_routes(clients, locales, include_blog=include_blog)
    finally:
        await clients.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kontent-static-routes",
        description="Print every published page and blog route for static generation",
    )
    parser.add_argument(
        "--locale",
        "-l",
        action="append",
        choices=LOCALES,
        help="Locale to enumerate (repeatable, default: all supported locales)",
    )
    parser.add_argument("--no-blog", action="store_true", help="Skip the blog index and posts")
    parser.add_argument("--plain", action="store_true", help="Print one path per line")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log repository requests")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    settings = Settings()
    if not settings.kontent_environment_id:
        print("Error: KONTENT_ENVIRONMENT_ID is not set", file=sys.stderr)
        sys.exit(1)

    locales = args.locale or list(LOCALES)
    try:
        routes = asyncio.run(collect_routes(settings, locales, include_blog=not args.no_blog))
    except RepositoryError as exc:
        print(f"Error: content repository request failed: {exc}", file=sys.stderr)
        sys.exit(1)

    print(format_routes(routes, plain=args.plain))


if __name__ == "__main__":
    main()
