"""Site configuration endpoint: header, footer and language switcher data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from kontent_site.api.deps import get_draft_mode, get_repository_clients, get_settings
from kontent_site.api.pages import asset_response
from kontent_site.config import Settings
from kontent_site.repository.clients import RepositoryClients
from kontent_site.schemas.site import (
    FooterColumnResponse,
    FooterResponse,
    LocaleOption,
    NavigationLink,
    PreviewContext,
    SiteConfigResponse,
)
from kontent_site.services.locale_service import (
    LOCALE_DISPLAY_NAMES,
    LOCALE_TO_DATE_LOCALE,
    LOCALES,
    is_valid_locale,
    locale_root,
    localize_href,
    resolve_locale,
)
from kontent_site.services.site_config_service import get_site_config

if TYPE_CHECKING:
    from kontent_site.models import Footer, NavigationNode, NavigationTree

router = APIRouter(prefix="/api/site", tags=["site"])


def _navigation_link(
    tree: NavigationTree, node: NavigationNode, locale: str, seen: frozenset[str]
) -> NavigationLink:
    seen = seen | {node.codename}
    return NavigationLink(
        label=node.label,
        url=localize_href(node.url, locale),
        children=[
            _navigation_link(tree, child, locale, seen)
            for child in tree.children_of(node.codename)
            if child.codename not in seen
        ],
    )


def navigation_links(tree: NavigationTree, locale: str) -> list[NavigationLink]:
    """Convert a navigation arena into nested links with localized URLs."""
    return [_navigation_link(tree, node, locale, frozenset()) for node in tree.root_nodes()]


def _footer_response(footer: Footer | None, locale: str) -> FooterResponse | None:
    if footer is None:
        return None
    return FooterResponse(
        columns=[
            FooterColumnResponse(title=column.title, links=navigation_links(column.links, locale))
            for column in footer.columns
        ],
        copyright_text=footer.copyright_text,
        social_links=navigation_links(footer.social_links, locale),
    )


@router.get("/{locale}", response_model=SiteConfigResponse)
async def site_config(
    locale: str,
    settings: Annotated[Settings, Depends(get_settings)],
    clients: Annotated[RepositoryClients, Depends(get_repository_clients)],
    draft: Annotated[bool, Depends(get_draft_mode)],
) -> SiteConfigResponse:
    """Site name, logo, navigation and footer for a locale."""
    if not is_valid_locale(locale):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unsupported locale")

    config = await get_site_config(clients, locale=locale, draft=draft)
    preview = None
    if draft:
        preview = PreviewContext(
            environment_id=settings.kontent_environment_id,
            language=resolve_locale(locale).cms_language,
        )
    return SiteConfigResponse(
        locale=locale,
        site_name=config.site_name,
        logo=asset_response(config.logo),
        header_navigation=navigation_links(config.header_navigation, locale),
        footer=_footer_response(config.footer, locale),
        locales=[
            LocaleOption(
                code=code,
                label=LOCALE_DISPLAY_NAMES[code],
                date_locale=LOCALE_TO_DATE_LOCALE[code],
                url=locale_root(code),
            )
            for code in LOCALES
        ],
        draft_mode=draft,
        preview=preview,
    )
