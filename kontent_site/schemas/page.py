"""Page-related schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AssetResponse(BaseModel):
    """An image or file asset."""

    name: str
    url: str
    description: str | None = None
    width: int | None = None
    height: int | None = None


class BlockResponse(BaseModel):
    """One dispatched body block, ready for its renderer."""

    component: str
    kind: str
    codename: str
    item_id: str | None = None
    locale: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)


class PageResponse(BaseModel):
    """A resolved page with its body blocks in authored order."""

    id: str
    codename: str
    language: str
    locale: str
    title: str
    slug: str
    meta_description: str
    draft_mode: bool = False
    blocks: list[BlockResponse] = Field(default_factory=list)
