"""Read-only domain models for content fetched from the CMS."""

from kontent_site.models.content import (
    Asset,
    ContentItem,
    ContentLink,
    ItemReference,
    LinkedValue,
    RichText,
    SystemAttributes,
    to_jsonable,
)
from kontent_site.models.site import (
    BlogPost,
    Footer,
    FooterColumn,
    NavigationNode,
    NavigationTree,
    Page,
    SiteConfig,
)

__all__ = [
    "Asset",
    "BlogPost",
    "ContentItem",
    "ContentLink",
    "Footer",
    "FooterColumn",
    "ItemReference",
    "LinkedValue",
    "NavigationNode",
    "NavigationTree",
    "Page",
    "RichText",
    "SiteConfig",
    "SystemAttributes",
    "to_jsonable",
]
