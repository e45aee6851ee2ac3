"""Content items as fetched from the repository.

Every item is a read-only, request-scoped copy of a language variant held by
the CMS. Element values are already decoded by the repository client:

- text, url_slug, custom, date_time -> ``str`` (or ``None`` for empty dates)
- number -> ``float | None``
- multiple_choice, taxonomy -> ``tuple[str, ...]`` of option codenames
- asset -> ``tuple[Asset, ...]``
- modular_content, subpages -> ``tuple[ContentItem | ItemReference, ...]``
- rich_text -> ``RichText``
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias


@dataclass(frozen=True)
class SystemAttributes:
    """System identity of a content item."""

    id: str
    codename: str
    type: str
    name: str
    language: str
    last_modified: str | None = None


@dataclass(frozen=True)
class ItemReference:
    """A linked item left unexpanded because the expansion depth was reached."""

    codename: str


@dataclass(frozen=True)
class Asset:
    name: str
    url: str
    description: str | None = None
    type: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class ContentLink:
    """Target of a rich-text hyperlink pointing at another content item."""

    item_id: str
    codename: str
    type: str
    url_slug: str = ""


@dataclass(frozen=True)
class RichText:
    """Rich-text HTML plus the items and item links it references."""

    html: str
    linked_items: tuple[LinkedValue, ...] = ()
    links: Mapping[str, ContentLink] = field(default_factory=lambda: MappingProxyType({}))

    def find_item(self, codename: str) -> ContentItem | None:
        for item in self.linked_items:
            if isinstance(item, ContentItem) and item.codename == codename:
                return item
        return None


@dataclass(frozen=True)
class ContentItem:
    """One language variant of a content item with decoded element values."""

    system: SystemAttributes
    elements: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def id(self) -> str:
        return self.system.id

    @property
    def codename(self) -> str:
        return self.system.codename

    @property
    def type(self) -> str:
        return self.system.type

    @property
    def name(self) -> str:
        return self.system.name

    @property
    def language(self) -> str:
        return self.system.language

    def value(self, name: str, default: Any = None) -> Any:
        return self.elements.get(name, default)

    def text(self, name: str) -> str:
        """Return a text-like element, with missing or empty values as ``""``."""
        value = self.elements.get(name)
        return value if isinstance(value, str) else ""

    def linked(self, name: str) -> tuple[LinkedValue, ...]:
        value = self.elements.get(name)
        return value if isinstance(value, tuple) else ()

    def linked_items(self, name: str) -> tuple[ContentItem, ...]:
        """Return only the expanded linked items of an element."""
        return tuple(v for v in self.linked(name) if isinstance(v, ContentItem))

    def assets(self, name: str) -> tuple[Asset, ...]:
        value = self.elements.get(name)
        if not isinstance(value, tuple):
            return ()
        return tuple(v for v in value if isinstance(v, Asset))

    def first_asset(self, name: str) -> Asset | None:
        assets = self.assets(name)
        return assets[0] if assets else None

    def rich_text(self, name: str) -> RichText | None:
        value = self.elements.get(name)
        return value if isinstance(value, RichText) else None

    def choices(self, name: str) -> tuple[str, ...]:
        value = self.elements.get(name)
        if not isinstance(value, tuple):
            return ()
        return tuple(v for v in value if isinstance(v, str))


LinkedValue: TypeAlias = "ContentItem | ItemReference"


def to_jsonable(value: Any) -> Any:
    """Convert decoded element values into plain JSON-compatible data."""
    if isinstance(value, ContentItem):
        return {
            "system": to_jsonable(value.system),
            "elements": {name: to_jsonable(v) for name, v in value.elements.items()},
        }
    if isinstance(value, ItemReference):
        return {"codename": value.codename, "expanded": False}
    if isinstance(value, RichText):
        return {
            "html": value.html,
            "linked_items": [to_jsonable(v) for v in value.linked_items],
            "links": {item_id: to_jsonable(link) for item_id, link in value.links.items()},
        }
    if isinstance(value, (SystemAttributes, Asset, ContentLink)):
        return {name: getattr(value, name) for name in value.__dataclass_fields__}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (tuple, list)):
        return [to_jsonable(v) for v in value]
    return value
