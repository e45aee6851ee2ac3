"""Rich-text resolution: CMS rich-text HTML -> sanitized, localized HTML.

The CMS stores inline components and linked items as
``<object type="application/kenticocloud" data-codename="...">`` placeholders
and links to other content items as ``<a data-item-id="...">``. Resolution
replaces the placeholders with labelled embed markers, points item links at
the linked item's localized route, and drops everything outside an allowlist.
"""

from __future__ import annotations

import html
import logging
import re
from html.parser import HTMLParser
from typing import TYPE_CHECKING
from urllib.parse import urlparse as _urlparse

from kontent_site.services.locale_service import localize_path
from kontent_site.services.page_service import content_path

if TYPE_CHECKING:
    from kontent_site.models import RichText

logger = logging.getLogger(__name__)

EMBED_OBJECT_TYPE = "application/kenticocloud"

# Marks an open element whose text content is dropped along with the tag.
_DROPPED = "\0dropped"
_DROP_CONTENT_TAGS: frozenset[str] = frozenset({"object", "script", "style"})

_SAFE_ID_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9:_-]*$")
_VOID_TAGS: frozenset[str] = frozenset({"br", "hr", "img"})
_ALLOWED_TAGS: frozenset[str] = frozenset(
    {
        "a",
        "blockquote",
        "br",
        "code",
        "em",
        "figcaption",
        "figure",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "img",
        "li",
        "ol",
        "p",
        "pre",
        "span",
        "strong",
        "sub",
        "sup",
        "table",
        "tbody",
        "td",
        "th",
        "thead",
        "tr",
        "ul",
    }
)
_GLOBAL_ALLOWED_ATTRS: frozenset[str] = frozenset({"class", "id"})
_TAG_ALLOWED_ATTRS: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title", "rel"}),
    "img": frozenset({"alt", "src", "title", "width", "height"}),
    "td": frozenset({"colspan", "rowspan"}),
    "th": frozenset({"colspan", "rowspan"}),
}


def _is_safe_url(url_value: str, *, allow_non_http: bool) -> bool:
    """Validate URL values for href/src attributes."""
    value = url_value.strip()
    if not value:
        return False
    if value.startswith(("#", "/", "./", "../")):
        return not value.startswith("//")

    parsed = _urlparse(value)
    if not parsed.scheme:
        return True

    allowed_schemes = {"http", "https"}
    if allow_non_http:
        allowed_schemes.update({"mailto", "tel"})
    return parsed.scheme.lower() in allowed_schemes


class _RichTextResolver(HTMLParser):
    """Allowlist sanitizer that also resolves embedded items and item links."""

    def __init__(self, rich_text: RichText, locale: str) -> None:
        super().__init__(convert_charrefs=False)
        self._rich_text = rich_text
        self._locale = locale
        self._parts: list[str] = []
        self._open_tags: list[str | None] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        tag_name = tag.lower()
        if tag_name == "object":
            self._append_embed(dict(attrs))
        if tag_name in _DROP_CONTENT_TAGS:
            self._open_tags.append(_DROPPED)
            return
        if tag_name not in _ALLOWED_TAGS:
            self._open_tags.append(None)
            return

        self._parts.append(self._render_open_tag(tag_name, attrs, self_closing=False))
        if tag_name in _VOID_TAGS:
            return
        self._open_tags.append(tag_name)

    def handle_endtag(self, tag: str) -> None:
        tag_name = tag.lower()
        if tag_name in _VOID_TAGS or not self._open_tags:
            return
        open_tag = self._open_tags.pop()
        if open_tag == tag_name:
            self._parts.append(f"</{tag_name}>")

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        tag_name = tag.lower()
        if tag_name == "object":
            self._append_embed(dict(attrs))
            return
        if tag_name not in _ALLOWED_TAGS:
            return
        self._parts.append(self._render_open_tag(tag_name, attrs, self_closing=True))

    def handle_data(self, data: str) -> None:
        if _DROPPED in self._open_tags:
            return
        self._parts.append(html.escape(data))

    def handle_entityref(self, name: str) -> None:
        self._parts.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        self._parts.append(f"&#{name};")

    def get_html(self) -> str:
        return "".join(self._parts)

    def _render_open_tag(
        self, tag_name: str, attrs: list[tuple[str, str | None]], *, self_closing: bool
    ) -> str:
        rendered_attrs = self._sanitize_attrs(tag_name, attrs)
        if tag_name == "a":
            item_href = self._item_link_href(attrs)
            if item_href is not None:
                rendered_attrs = [(n, v) for n, v in rendered_attrs if n != "href"]
                rendered_attrs.insert(0, ("href", item_href))
        attrs_text = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in rendered_attrs
        )
        closing = " /" if self_closing else ""
        return f"<{tag_name}{attrs_text}{closing}>"

    def _item_link_href(self, attrs: list[tuple[str, str | None]]) -> str | None:
        item_id = dict(attrs).get("data-item-id")
        if not item_id:
            return None
        link = self._rich_text.links.get(item_id)
        if link is None:
            logger.debug("Rich-text link to unknown item %s", item_id)
            return "#"
        path = content_path(link.type, link.url_slug)
        if path is None:
            return "#"
        return localize_path(path, self._locale)

    def _append_embed(self, attrs: dict[str, str | None]) -> None:
        if attrs.get("type") != EMBED_OBJECT_TYPE:
            return
        codename = attrs.get("data-codename") or ""
        item = self._rich_text.find_item(codename)
        if item is None:
            logger.debug("Dropping unexpanded rich-text embed %r", codename)
            return
        self._parts.append(
            f'<div class="embedded-item" data-codename="{html.escape(item.codename, quote=True)}"'
            f' data-type="{html.escape(item.type, quote=True)}">'
            f"<p>[Embedded: {html.escape(item.type)}: {html.escape(item.name)}]</p></div>"
        )

    def _sanitize_attrs(
        self,
        tag_name: str,
        attrs: list[tuple[str, str | None]],
    ) -> list[tuple[str, str]]:
        allowed_attrs = _GLOBAL_ALLOWED_ATTRS | _TAG_ALLOWED_ATTRS.get(tag_name, frozenset())
        sanitized: list[tuple[str, str]] = []

        for raw_name, raw_value in attrs:
            name = raw_name.lower()
            if raw_value is None or name not in allowed_attrs:
                continue

            value = raw_value.strip()
            if name == "href" and not _is_safe_url(value, allow_non_http=True):
                continue
            if name == "src" and not _is_safe_url(value, allow_non_http=False):
                continue
            if name == "id" and not _SAFE_ID_RE.fullmatch(value):
                continue

            sanitized.append((name, value))
        return sanitized


def resolve_rich_text(rich_text: RichText | None, *, locale: str) -> str:
    """Return sanitized HTML with embedded items and item links resolved."""
    if rich_text is None or not rich_text.html:
        return ""
    resolver = _RichTextResolver(rich_text, locale)
    resolver.feed(rich_text.html)
    resolver.close()
    return resolver.get_html()
