"""Blog-related schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from kontent_site.schemas.page import AssetResponse


class BlogPostSummary(BaseModel):
    """Blog post card for the index listing."""

    id: str
    codename: str
    title: str
    slug: str
    url: str
    summary: str
    publish_date: str | None = None
    image: AssetResponse | None = None


class BlogIndexResponse(BaseModel):
    """Blog index with its editable UI strings."""

    locale: str
    heading: str
    subtitle: str
    empty_message: str
    draft_mode: bool = False
    posts: list[BlogPostSummary] = Field(default_factory=list)


class BlogPostDetail(BlogPostSummary):
    """Full blog post with resolved rich-text body."""

    locale: str
    body_html: str
    embedded_items: list[dict[str, Any]] = Field(default_factory=list)
    draft_mode: bool = False
