"""Static route enumeration for build-time page materialization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kontent_site.repository.base import BLOG_POST_TYPE, PAGE_TYPE
from kontent_site.services.blog_service import list_blog_posts
from kontent_site.services.locale_service import LOCALES, is_valid_locale, localize_path
from kontent_site.services.page_service import blog_post_path, page_path, resolve_all_pages

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kontent_site.repository.clients import RepositoryClients

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaticRoute:
    locale: str
    path: str
    content_type: str
    codename: str | None = None


async def enumerate_static_routes(
    clients: RepositoryClients,
    locales: Iterable[str] = LOCALES,
    *,
    include_blog: bool = True,
) -> list[StaticRoute]:
    """List every published route, one repository pass per locale.

    Locales are processed sequentially in the given order; a locale listed
    twice is enumerated once. Pages without a variant in a locale's language
    produce no route for that locale.
    """
    routes: list[StaticRoute] = []
    seen_locales: set[str] = set()
    for locale in locales:
        if locale in seen_locales:
            continue
        if not is_valid_locale(locale):
            msg = f"Unsupported locale: {locale!r}"
            raise ValueError(msg)
        seen_locales.add(locale)

        pages = await resolve_all_pages(clients, locale=locale)
        for page in pages:
            path = page_path(page.slug)
            routes.append(
                StaticRoute(locale, localize_path(path, locale), PAGE_TYPE, page.codename)
            )

        if include_blog:
            routes.append(StaticRoute(locale, localize_path("/blog", locale), "blog_index"))
            for post in await list_blog_posts(clients, locale=locale):
                if not post.slug:
                    logger.warning("Blog post %s has no slug; skipping", post.codename)
                    continue
                path = blog_post_path(post.slug)
                routes.append(
                    StaticRoute(locale, localize_path(path, locale), BLOG_POST_TYPE, post.codename)
                )
        logger.info("Enumerated routes for locale %s", locale)
    return routes
