"""Site configuration service: the singleton config item, navigation and footer."""

from __future__ import annotations

import logging
from collections import deque
from types import MappingProxyType
from typing import TYPE_CHECKING

from kontent_site.models import (
    ContentItem,
    Footer,
    FooterColumn,
    NavigationNode,
    NavigationTree,
    SiteConfig,
)
from kontent_site.repository.base import SITE_CONFIG_DEPTH, SITE_CONFIG_TYPE
from kontent_site.services.locale_service import resolve_locale

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kontent_site.models import LinkedValue
    from kontent_site.repository.clients import RepositoryClients

logger = logging.getLogger(__name__)

# Child levels kept below the top-level navigation entries. The content model
# allows deeper nesting; the site renders one level of children.
NAVIGATION_DEPTH = 1

DEFAULT_SITE_NAME = "Acme Inc."
DEFAULT_BLOG_HEADING = "Blog"


def build_navigation_tree(
    items: Iterable[LinkedValue], *, max_depth: int = NAVIGATION_DEPTH
) -> NavigationTree:
    """Flatten a linked navigation-item graph into a depth-bounded arena.

    Items are visited breadth-first and stored once per codename, so
    self-references and cycles cannot cause repeated visits.
    """
    nodes: dict[str, NavigationNode] = {}
    roots: list[str] = []
    queue: deque[tuple[ContentItem, int]] = deque()

    for item in items:
        if isinstance(item, ContentItem) and item.codename not in roots:
            roots.append(item.codename)
            queue.append((item, 0))

    while queue:
        item, level = queue.popleft()
        if item.codename in nodes:
            continue
        children = item.linked_items("children") if level < max_depth else ()
        nodes[item.codename] = NavigationNode(
            codename=item.codename,
            label=item.text("label"),
            url=item.text("url"),
            children=tuple(child.codename for child in children),
        )
        for child in children:
            queue.append((child, level + 1))

    return NavigationTree(nodes=MappingProxyType(nodes), roots=tuple(roots))


def _build_footer(config_item: ContentItem) -> Footer | None:
    footers = config_item.linked_items("footer")
    if not footers:
        return None
    footer = footers[0]
    columns = tuple(
        FooterColumn(
            title=column.text("title"),
            links=build_navigation_tree(column.linked("links"), max_depth=0),
        )
        for column in footer.linked_items("columns")
    )
    return Footer(
        columns=columns,
        copyright_text=footer.text("copyright_text"),
        social_links=build_navigation_tree(footer.linked("social_links"), max_depth=0),
    )


def site_config_from_item(item: ContentItem | None) -> SiteConfig:
    """Build the site configuration, using defaults when the item is missing."""
    if item is None:
        return SiteConfig(
            site_name=DEFAULT_SITE_NAME,
            logo=None,
            header_navigation=NavigationTree(),
            footer=None,
            blog_heading=DEFAULT_BLOG_HEADING,
            blog_subtitle="",
            blog_empty_message="",
        )
    return SiteConfig(
        site_name=item.text("site_name") or DEFAULT_SITE_NAME,
        logo=item.first_asset("logo"),
        header_navigation=build_navigation_tree(item.linked("header_navigation")),
        footer=_build_footer(item),
        blog_heading=item.text("blog_heading") or DEFAULT_BLOG_HEADING,
        blog_subtitle=item.text("blog_subtitle"),
        blog_empty_message=item.text("blog_empty_message"),
    )


async def get_site_config(
    clients: RepositoryClients,
    *,
    locale: str,
    draft: bool = False,
) -> SiteConfig:
    """Fetch the singleton site configuration for a locale."""
    resolution = resolve_locale(locale)
    items = await clients.for_mode(draft).fetch_by_type(
        SITE_CONFIG_TYPE,
        language=resolution.cms_language,
        expand_depth=SITE_CONFIG_DEPTH,
        limit=1,
    )
    if not items:
        logger.warning(
            "No site_config item in language %r; using defaults", resolution.cms_language
        )
        return site_config_from_item(None)
    return site_config_from_item(items[0])
