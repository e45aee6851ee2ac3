"""Page service: slug-based page resolution and preview URL resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from kontent_site.exceptions import AmbiguousSlugError, RepositoryError
from kontent_site.models import Page
from kontent_site.repository.base import (
    BLOG_POST_TYPE,
    PAGE_DEPTH,
    PAGE_TYPE,
    PREVIEW_DEPTH,
)
from kontent_site.services.locale_service import resolve_locale

if TYPE_CHECKING:
    from kontent_site.models import ContentItem
    from kontent_site.repository.clients import RepositoryClients

logger = logging.getLogger(__name__)

DuplicateSlugPolicy = Literal["first", "error"]


def normalize_slug(slug_path: str) -> str:
    """Strip surrounding slashes from a route slug; ``""`` stays the site root."""
    return slug_path.strip("/")


def page_from_item(item: ContentItem) -> Page:
    return Page(
        id=item.id,
        codename=item.codename,
        language=item.language,
        title=item.text("title"),
        slug=item.text("slug"),
        meta_description=item.text("meta_description"),
        body=item.linked("body"),
    )


def pick_single(
    items: tuple[ContentItem, ...],
    *,
    slug: str,
    language: str,
    policy: DuplicateSlugPolicy = "first",
) -> ContentItem | None:
    """Return the first of the items claiming one slug.

    The CMS does not enforce slug uniqueness per language. Several matches are
    a data-integrity problem: logged under the "first" policy, raised under
    the "error" policy.
    """
    if not items:
        return None
    if len(items) > 1:
        codenames = [item.codename for item in items]
        if policy == "error":
            raise AmbiguousSlugError(slug, language, codenames)
        logger.warning(
            "Ambiguous slug %r in language %r claimed by %s; using %s",
            slug,
            language,
            codenames,
            codenames[0],
        )
    return items[0]


async def resolve_page(
    clients: RepositoryClients,
    slug_path: str,
    *,
    locale: str,
    draft: bool = False,
    duplicate_slug_policy: DuplicateSlugPolicy = "first",
) -> Page | None:
    """Resolve a page by slug in the given locale, or None when there is none.

    The empty slug is a real filter value (the site root), never "no filter".
    """
    resolution = resolve_locale(locale)
    if not resolution.is_valid:
        return None

    slug = normalize_slug(slug_path)
    repository = clients.for_mode(draft)
    items = await repository.fetch_by_type(
        PAGE_TYPE,
        language=resolution.cms_language,
        expand_depth=PAGE_DEPTH,
        slug_equals=slug,
    )
    item = pick_single(
        items, slug=slug, language=resolution.cms_language, policy=duplicate_slug_policy
    )
    if item is None:
        return None
    return page_from_item(item)


async def resolve_all_pages(
    clients: RepositoryClients,
    *,
    locale: str,
    draft: bool = False,
) -> tuple[Page, ...]:
    """Return every page that has a variant in the locale's language."""
    resolution = resolve_locale(locale)
    if not resolution.is_valid:
        msg = f"Unsupported locale: {locale!r}"
        raise ValueError(msg)

    repository = clients.for_mode(draft)
    items = await repository.fetch_by_type(
        PAGE_TYPE,
        language=resolution.cms_language,
        expand_depth=PAGE_DEPTH,
    )
    return tuple(page_from_item(item) for item in items)


def page_path(slug: str) -> str:
    """Route path of a page; the empty slug is the site root."""
    return f"/{slug}" if slug else "/"


def blog_post_path(slug: str) -> str:
    """Route path of a blog post; a post without a slug maps to the blog index."""
    return f"/blog/{slug}" if slug else "/blog"


def content_path(content_type: str, slug: str) -> str | None:
    """Return the route path (without locale) of a routable content type.

    Returns None for types that have no route.
    """
    if content_type == BLOG_POST_TYPE:
        return blog_post_path(slug)
    if content_type == PAGE_TYPE:
        return page_path(slug)
    return None


async def resolve_preview_path(
    clients: RepositoryClients,
    codename: str,
    content_type: str,
    *,
    locale: str | None = None,
) -> str:
    """Compute the route path of an item the CMS editor asked to preview.

    Reads the item's slug from the draft view. Any failure (unknown codename,
    unpublished or deleted item, repository error, unroutable type) falls back
    to the locale root ``/`` so the editor's click never hard-fails.
    """
    resolution = resolve_locale(locale)
    try:
        item = await clients.draft.fetch_by_codename(
            codename,
            language=resolution.cms_language,
            expand_depth=PREVIEW_DEPTH,
        )
    except RepositoryError as exc:
        logger.warning("Preview resolution for %r failed: %s", codename, exc)
        return "/"

    if item is None:
        logger.warning("Preview resolution: item %r not found", codename)
        return "/"

    path = content_path(content_type, item.text("slug"))
    if path is None:
        logger.warning("Preview resolution: type %r of %r has no route", content_type, codename)
        return "/"
    return path
