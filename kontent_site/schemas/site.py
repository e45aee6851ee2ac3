"""Site configuration schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from kontent_site.schemas.page import AssetResponse


class NavigationLink(BaseModel):
    """Navigation entry with a localized URL."""

    label: str
    url: str
    children: list[NavigationLink] = Field(default_factory=list)


class FooterColumnResponse(BaseModel):
    title: str
    links: list[NavigationLink] = Field(default_factory=list)


class FooterResponse(BaseModel):
    columns: list[FooterColumnResponse] = Field(default_factory=list)
    copyright_text: str
    social_links: list[NavigationLink] = Field(default_factory=list)


class LocaleOption(BaseModel):
    """Language switcher entry."""

    code: str
    label: str
    date_locale: str
    url: str


class PreviewContext(BaseModel):
    """Attributes the renderer adds for in-context editing while in draft mode."""

    environment_id: str
    language: str


class SiteConfigResponse(BaseModel):
    """Site-wide chrome: name, logo, navigation, footer, locales."""

    locale: str
    site_name: str
    logo: AssetResponse | None = None
    header_navigation: list[NavigationLink] = Field(default_factory=list)
    footer: FooterResponse | None = None
    locales: list[LocaleOption] = Field(default_factory=list)
    draft_mode: bool = False
    preview: PreviewContext | None = None
