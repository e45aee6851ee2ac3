"""Content repository protocol and expansion-depth constants."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kontent_site.models import ContentItem

# Number of linked-item hops resolved inline per fetch. Beyond the bound,
# references stay unexpanded, which also cuts cycles between components.
PAGE_DEPTH = 3  # page -> block -> card
SITE_CONFIG_DEPTH = 3  # config -> navigation item -> child item
BLOG_LIST_DEPTH = 1
BLOG_POST_DEPTH = 2
PREVIEW_DEPTH = 0

# Content type codenames used for routing.
PAGE_TYPE = "page"
BLOG_POST_TYPE = "blog_post"
SITE_CONFIG_TYPE = "site_config"


@runtime_checkable
class ContentRepository(Protocol):
    """Read-only access to one view (published or draft) of the CMS content."""

    draft: bool

    async def fetch_by_type(
        self,
        content_type: str,
        *,
        language: str,
        expand_depth: int,
        slug_equals: str | None = None,
        order_by_descending: str | None = None,
        limit: int | None = None,
    ) -> tuple[ContentItem, ...]:
        """Return the matching items in repository order.

        ``slug_equals=""`` filters for the empty slug (site root); ``None``
        applies no slug filter at all. No match is an empty tuple.
        """
        ...

    async def fetch_by_codename(
        self,
        codename: str,
        *,
        language: str,
        expand_depth: int,
    ) -> ContentItem | None:
        """Return a single item, or None when it does not exist in this view."""
        ...

    async def aclose(self) -> None:
        """Release transport resources."""
        ...
