"""Localized page routes: root redirect, home page and slug catch-all."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from kontent_site.api.deps import get_draft_mode, get_repository_clients, get_settings
from kontent_site.config import Settings
from kontent_site.models import to_jsonable
from kontent_site.repository.clients import RepositoryClients
from kontent_site.schemas.page import AssetResponse, BlockResponse, PageResponse
from kontent_site.services.block_service import dispatch_body
from kontent_site.services.locale_service import (
    DEFAULT_LOCALE,
    default_locale_path,
    is_valid_locale,
    locale_root,
    looks_like_locale,
)
from kontent_site.services.page_service import resolve_page

if TYPE_CHECKING:
    from kontent_site.models import Asset

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

# First path segments owned by the application rather than by content.
_RESERVED_SEGMENTS = frozenset({"api", "docs", "redoc", "openapi.json"})


def asset_response(asset: Asset | None) -> AssetResponse | None:
    if asset is None:
        return None
    return AssetResponse(
        name=asset.name,
        url=asset.url,
        description=asset.description or None,
        width=asset.width,
        height=asset.height,
    )


async def missing_locale_redirect(
    request: Request,
    locale: str,
    clients: RepositoryClients,
    *,
    draft: bool = False,
) -> RedirectResponse | None:
    """Check the locale segment of a content route.

    Returns None for a supported locale. Otherwise the segment is either an
    unsupported locale (404) or the first slug segment of a path without a
    locale prefix, which redirects to the default-locale equivalent with the
    query string kept. A locale-shaped segment (``fr``, ``pt-br``) counts as a
    missing prefix only when a default-locale page exists at the full path,
    so two-letter page slugs such as ``/ai`` still redirect.
    """
    if is_valid_locale(locale):
        return None
    if locale.lower() in _RESERVED_SEGMENTS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    if looks_like_locale(locale):
        page = await resolve_page(clients, request.url.path, locale=DEFAULT_LOCALE, draft=draft)
        if page is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    target = default_locale_path(request.url.path)
    if request.url.query:
        target = f"{target}?{request.url.query}"
    logger.debug("Redirecting %s to %s", request.url.path, target)
    return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


async def _render_page(
    slug_path: str,
    *,
    locale: str,
    settings: Settings,
    clients: RepositoryClients,
    draft: bool,
) -> PageResponse:
    page = await resolve_page(
        clients,
        slug_path,
        locale=locale,
        draft=draft,
        duplicate_slug_policy=settings.duplicate_slug_policy,
    )
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")

    descriptors = dispatch_body(page.body, locale=locale, development=settings.is_development)
    return PageResponse(
        id=page.id,
        codename=page.codename,
        language=page.language,
        locale=locale,
        title=page.title,
        slug=page.slug,
        meta_description=page.meta_description,
        draft_mode=draft,
        blocks=[
            BlockResponse(
                component=descriptor.component,
                kind=descriptor.kind,
                codename=descriptor.codename,
                item_id=descriptor.item_id,
                locale=descriptor.locale,
                fields=to_jsonable(descriptor.fields),
            )
            for descriptor in descriptors
        ],
    )


@router.get("/", include_in_schema=False)
async def root_redirect(request: Request) -> RedirectResponse:
    """Send the bare site root to the default locale's home page."""
    target = locale_root(DEFAULT_LOCALE)
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/{locale}", response_model=PageResponse)
async def home_page(
    request: Request,
    locale: str,
    settings: Annotated[Settings, Depends(get_settings)],
    clients: Annotated[RepositoryClients, Depends(get_repository_clients)],
    draft: Annotated[bool, Depends(get_draft_mode)],
) -> PageResponse | Response:
    """The locale's home page: the page whose slug is empty."""
    redirect = await missing_locale_redirect(request, locale, clients, draft=draft)
    if redirect is not None:
        return redirect
    return await _render_page("", locale=locale, settings=settings, clients=clients, draft=draft)


@router.get("/{locale}/{slug_path:path}", response_model=PageResponse)
async def page_by_slug(
    request: Request,
    locale: str,
    slug_path: str,
    settings: Annotated[Settings, Depends(get_settings)],
    clients: Annotated[RepositoryClients, Depends(get_repository_clients)],
    draft: Annotated[bool, Depends(get_draft_mode)],
) -> PageResponse | Response:
    redirect = await missing_locale_redirect(request, locale, clients, draft=draft)
    if redirect is not None:
        return redirect
    return await _render_page(
        slug_path, locale=locale, settings=settings, clients=clients, draft=draft
    )
