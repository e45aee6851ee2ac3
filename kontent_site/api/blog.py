"""Localized blog routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from kontent_site.api.deps import get_draft_mode, get_repository_clients, get_settings
from kontent_site.api.pages import asset_response, missing_locale_redirect
from kontent_site.config import Settings
from kontent_site.models import ContentItem, to_jsonable
from kontent_site.repository.clients import RepositoryClients
from kontent_site.schemas.blog import BlogIndexResponse, BlogPostDetail, BlogPostSummary
from kontent_site.services.blog_service import get_blog_post, list_blog_posts
from kontent_site.services.datetime_service import format_iso
from kontent_site.services.locale_service import localize_path
from kontent_site.services.page_service import blog_post_path
from kontent_site.services.rich_text_service import resolve_rich_text
from kontent_site.services.site_config_service import get_site_config

if TYPE_CHECKING:
    from kontent_site.models import BlogPost

router = APIRouter(tags=["blog"])


def _summary_fields(post: BlogPost, locale: str) -> dict[str, object]:
    return {
        "id": post.id,
        "codename": post.codename,
        "title": post.title,
        "slug": post.slug,
        "url": localize_path(blog_post_path(post.slug), locale),
        "summary": post.summary,
        "publish_date": format_iso(post.publish_date) if post.publish_date else None,
        "image": asset_response(post.image),
    }


@router.get("/{locale}/blog", response_model=BlogIndexResponse)
@router.get("/{locale}/blog/", response_model=BlogIndexResponse, include_in_schema=False)
async def blog_index(
    request: Request,
    locale: str,
    clients: Annotated[RepositoryClients, Depends(get_repository_clients)],
    draft: Annotated[bool, Depends(get_draft_mode)],
) -> BlogIndexResponse | Response:
    """List blog posts newest first, with the blog's UI strings from site config."""
    redirect = await missing_locale_redirect(request, locale, clients, draft=draft)
    if redirect is not None:
        return redirect

    config = await get_site_config(clients, locale=locale, draft=draft)
    posts = await list_blog_posts(clients, locale=locale, draft=draft)
    return BlogIndexResponse(
        locale=locale,
        heading=config.blog_heading,
        subtitle=config.blog_subtitle,
        empty_message=config.blog_empty_message,
        draft_mode=draft,
        posts=[BlogPostSummary(**_summary_fields(post, locale)) for post in posts],
    )


@router.get("/{locale}/blog/{slug}", response_model=BlogPostDetail)
@router.get("/{locale}/blog/{slug}/", response_model=BlogPostDetail, include_in_schema=False)
async def blog_post(
    request: Request,
    locale: str,
    slug: str,
    settings: Annotated[Settings, Depends(get_settings)],
    clients: Annotated[RepositoryClients, Depends(get_repository_clients)],
    draft: Annotated[bool, Depends(get_draft_mode)],
) -> BlogPostDetail | Response:
    redirect = await missing_locale_redirect(request, locale, clients, draft=draft)
    if redirect is not None:
        return redirect

    post = await get_blog_post(
        clients,
        slug,
        locale=locale,
        draft=draft,
        duplicate_slug_policy=settings.duplicate_slug_policy,
    )
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    embedded = post.body.linked_items if post.body is not None else ()
    return BlogPostDetail(
        **_summary_fields(post, locale),
        locale=locale,
        body_html=resolve_rich_text(post.body, locale=locale),
        embedded_items=[to_jsonable(item) for item in embedded if isinstance(item, ContentItem)],
        draft_mode=draft,
    )
