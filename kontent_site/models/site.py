"""Typed views over the content items the site renders."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from kontent_site.models.content import Asset, LinkedValue, RichText


@dataclass(frozen=True)
class Page:
    """A routable page whose body is an ordered sequence of blocks.

    ``body`` keeps the authored order. Each element is either an expanded
    block or an ``ItemReference`` when the expansion depth was exceeded.
    An empty ``slug`` denotes the site root.
    """

    id: str
    codename: str
    language: str
    title: str
    slug: str
    meta_description: str
    body: tuple[LinkedValue, ...]


@dataclass(frozen=True)
class BlogPost:
    id: str
    codename: str
    language: str
    title: str
    slug: str
    summary: str
    body: RichText | None
    image: Asset | None
    publish_date: datetime | None


@dataclass(frozen=True)
class NavigationNode:
    codename: str
    label: str
    url: str
    children: tuple[str, ...] = ()


@dataclass(frozen=True)
class NavigationTree:
    """Flat arena of navigation nodes keyed by codename.

    ``roots`` lists the top-level entries in authored order; each node keeps
    the codenames of its children. Nodes are stored only down to the depth the
    tree was built with; a child codename may point back at an ancestor, so
    recursive walkers track what they have visited.
    """

    nodes: Mapping[str, NavigationNode] = field(default_factory=lambda: MappingProxyType({}))
    roots: tuple[str, ...] = ()

    def root_nodes(self) -> tuple[NavigationNode, ...]:
        return tuple(self.nodes[c] for c in self.roots if c in self.nodes)

    def children_of(self, codename: str) -> tuple[NavigationNode, ...]:
        node = self.nodes.get(codename)
        if node is None:
            return ()
        return tuple(self.nodes[c] for c in node.children if c in self.nodes)


@dataclass(frozen=True)
class FooterColumn:
    title: str
    links: NavigationTree


@dataclass(frozen=True)
class Footer:
    columns: tuple[FooterColumn, ...]
    copyright_text: str
    social_links: NavigationTree


@dataclass(frozen=True)
class SiteConfig:
    site_name: str
    logo: Asset | None
    header_navigation: NavigationTree
    footer: Footer | None
    blog_heading: str
    blog_subtitle: str
    blog_empty_message: str
