"""Blog service: post listing and slug lookup."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from kontent_site.models import BlogPost
from kontent_site.repository.base import BLOG_LIST_DEPTH, BLOG_POST_DEPTH, BLOG_POST_TYPE
from kontent_site.services.datetime_service import parse_cms_datetime
from kontent_site.services.locale_service import resolve_locale
from kontent_site.services.page_service import normalize_slug, pick_single

if TYPE_CHECKING:
    from kontent_site.models import ContentItem
    from kontent_site.repository.clients import RepositoryClients
    from kontent_site.services.page_service import DuplicateSlugPolicy

logger = logging.getLogger(__name__)

_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def _parse_publish_date(item: ContentItem) -> datetime | None:
    raw = item.value("publish_date")
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return parse_cms_datetime(raw)
    except ValueError:
        logger.warning("Blog post %s has an unparseable publish_date %r", item.codename, raw)
        return None


def blog_post_from_item(item: ContentItem) -> BlogPost:
    return BlogPost(
        id=item.id,
        codename=item.codename,
        language=item.language,
        title=item.text("title"),
        slug=item.text("slug"),
        summary=item.text("summary"),
        body=item.rich_text("body"),
        image=item.first_asset("image"),
        publish_date=_parse_publish_date(item),
    )


async def list_blog_posts(
    clients: RepositoryClients,
    *,
    locale: str,
    draft: bool = False,
) -> list[BlogPost]:
    """List posts newest first; posts without a publish date come last."""
    resolution = resolve_locale(locale)
    if not resolution.is_valid:
        return []

    items = await clients.for_mode(draft).fetch_by_type(
        BLOG_POST_TYPE,
        language=resolution.cms_language,
        expand_depth=BLOG_LIST_DEPTH,
        order_by_descending="publish_date",
    )
    posts = [blog_post_from_item(item) for item in items]
    posts.sort(key=lambda p: p.publish_date or _UNDATED, reverse=True)
    return posts


async def get_blog_post(
    clients: RepositoryClients,
    slug: str,
    *,
    locale: str,
    draft: bool = False,
    duplicate_slug_policy: DuplicateSlugPolicy = "first",
) -> BlogPost | None:
    resolution = resolve_locale(locale)
    slug = normalize_slug(slug)
    if not resolution.is_valid or not slug:
        return None

    items = await clients.for_mode(draft).fetch_by_type(
        BLOG_POST_TYPE,
        language=resolution.cms_language,
        expand_depth=BLOG_POST_DEPTH,
        slug_equals=slug,
    )
    item = pick_single(
        items, slug=slug, language=resolution.cms_language, policy=duplicate_slug_policy
    )
    if item is None:
        return None
    return blog_post_from_item(item)
