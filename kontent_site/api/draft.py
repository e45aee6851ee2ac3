"""Draft mode endpoints used by the CMS preview pane."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse

from kontent_site.api.deps import get_client_ip, get_repository_clients, get_settings
from kontent_site.config import Settings
from kontent_site.repository.base import PAGE_TYPE
from kontent_site.repository.clients import RepositoryClients
from kontent_site.services.draft_service import create_draft_token, preview_secret_matches
from kontent_site.services.locale_service import (
    ensure_locale_prefix,
    is_site_relative,
    locale_root,
    localize_path,
    resolve_locale,
)
from kontent_site.services.page_service import resolve_preview_path
from kontent_site.services.rate_limit_service import InMemoryRateLimiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["draft"])


def _check_rate_limit(limiter: InMemoryRateLimiter, key: str, settings: Settings) -> None:
    """Raise 429 if the client exhausted its preview-secret attempts."""
    retry_after = limiter.retry_after(
        key, settings.draft_secret_max_failures, settings.draft_secret_window_seconds
    )
    if retry_after:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many invalid draft mode attempts",
            headers={"Retry-After": str(retry_after)},
        )


@router.get("/draft")
async def enable_draft_mode(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    clients: Annotated[RepositoryClients, Depends(get_repository_clients)],
    secret: Annotated[str | None, Query()] = None,
    locale: Annotated[str | None, Query()] = None,
    codename: Annotated[str | None, Query()] = None,
    content_type: Annotated[str, Query(alias="type")] = PAGE_TYPE,
    slug: Annotated[str | None, Query()] = None,
) -> RedirectResponse:
    """Verify the preview secret, start a draft session and redirect to the item.

    The redirect target is, in order of preference: the legacy ``slug``
    parameter, the route of the item named by ``codename`` and ``type``, or
    the locale root.
    """
    limiter: InMemoryRateLimiter = request.app.state.rate_limiter
    client_key = f"draft:{get_client_ip(request)}"
    _check_rate_limit(limiter, client_key, settings)

    if not preview_secret_matches(secret, settings.kontent_preview_secret):
        limiter.record_failure(client_key, settings.draft_secret_window_seconds)
        logger.warning("Rejected draft mode request from %s: invalid secret", client_key)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid secret")
    limiter.clear(client_key)

    target_locale = resolve_locale(locale).canonical_locale
    if slug:
        candidate = slug if slug.startswith("/") else f"/{slug}"
        if is_site_relative(candidate):
            target = ensure_locale_prefix(candidate, target_locale)
        else:
            logger.warning("Ignoring non-relative draft redirect target %r", slug)
            target = locale_root(target_locale)
    elif codename:
        path = await resolve_preview_path(clients, codename, content_type, locale=target_locale)
        target = localize_path(path, target_locale)
    else:
        target = locale_root(target_locale)

    logger.info("Draft mode enabled, redirecting to %s", target)
    response = RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    response.set_cookie(
        key=settings.draft_cookie_name,
        value=create_draft_token(settings.secret_key, settings.draft_cookie_max_age_seconds),
        max_age=settings.draft_cookie_max_age_seconds,
        httponly=True,
        samesite="lax",
        path="/",
    )
    return response


@router.get("/disable-draft")
async def disable_draft_mode(
    settings: Annotated[Settings, Depends(get_settings)],
    return_to: Annotated[str | None, Query(alias="returnTo")] = None,
    locale: Annotated[str | None, Query()] = None,
) -> RedirectResponse:
    """End the draft session and go back to the published view."""
    if return_to and is_site_relative(return_to):
        target = return_to
    else:
        target = locale_root(resolve_locale(locale).canonical_locale)
    response = RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    response.delete_cookie(
        key=settings.draft_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
    )
    return response
