"""Kontent.ai Delivery API client.

One ``DeliveryClient`` instance serves one view of the content: published
(Delivery API) or draft (Preview API, authenticated with the preview key).
Linked items arrive flattened in the response's ``modular_content`` map; the
decoder rebuilds the graph by following each element's own codename list, so
the authored order never depends on the order of that map.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import httpx

from kontent_site.exceptions import RepositoryError
from kontent_site.models import (
    Asset,
    ContentItem,
    ContentLink,
    ItemReference,
    RichText,
    SystemAttributes,
)

if TYPE_CHECKING:
    from kontent_site.models import LinkedValue

logger = logging.getLogger(__name__)

_CODENAME_PATTERN = re.compile(r"^[a-z0-9_]+$")
_LINKED_ELEMENT_TYPES = frozenset({"modular_content", "subpages"})
_CHOICE_ELEMENT_TYPES = frozenset({"multiple_choice", "taxonomy"})


class _ItemDecoder:
    """Decode raw API items, expanding linked items up to ``max_depth`` hops."""

    def __init__(self, modular_content: dict[str, Any], max_depth: int) -> None:
        self._modular_content = modular_content
        self._max_depth = max_depth

    def decode(self, raw: Any, depth: int = 0) -> ContentItem:
        if not isinstance(raw, dict):
            msg = "Malformed content item in repository response"
            raise RepositoryError(msg)
        system = _decode_system(raw.get("system"))
        raw_elements = raw.get("elements") or {}
        if not isinstance(raw_elements, dict):
            msg = f"Malformed elements for item {system.codename!r}"
            raise RepositoryError(msg)
        elements = {
            name: self._decode_element(element, depth)
            for name, element in raw_elements.items()
            if isinstance(element, dict)
        }
        return ContentItem(system=system, elements=MappingProxyType(elements))

    def _decode_element(self, element: dict[str, Any], depth: int) -> Any:
        element_type = element.get("type")
        value = element.get("value")
        if element_type in _LINKED_ELEMENT_TYPES:
            return self._resolve_linked(value, depth)
        if element_type == "rich_text":
            return RichText(
                html=value if isinstance(value, str) else "",
                linked_items=self._resolve_linked(element.get("modular_content"), depth),
                links=MappingProxyType(_decode_links(element.get("links"))),
            )
        if element_type == "asset":
            return tuple(_decode_asset(a) for a in value or () if isinstance(a, dict))
        if element_type in _CHOICE_ELEMENT_TYPES:
            return tuple(
                str(option["codename"])
                for option in value or ()
                if isinstance(option, dict) and "codename" in option
            )
        if element_type == "number":
            return float(value) if isinstance(value, (int, float)) else None
        if element_type == "date_time":
            return value if isinstance(value, str) and value else None
        return value if isinstance(value, str) else ""

    def _resolve_linked(self, codenames: Any, depth: int) -> tuple[LinkedValue, ...]:
        if not isinstance(codenames, list):
            return ()
        resolved: list[LinkedValue] = []
        for codename in codenames:
            if not isinstance(codename, str):
                continue
            raw_child = self._modular_content.get(codename)
            if depth >= self._max_depth or raw_child is None:
                resolved.append(ItemReference(codename=codename))
            else:
                resolved.append(self.decode(raw_child, depth + 1))
        return tuple(resolved)


def _decode_system(raw: Any) -> SystemAttributes:
    if not isinstance(raw, dict):
        msg = "Content item is missing system attributes"
        raise RepositoryError(msg)
    try:
        return SystemAttributes(
            id=str(raw["id"]),
            codename=str(raw["codename"]),
            type=str(raw["type"]),
            name=str(raw.get("name", "")),
            language=str(raw.get("language", "")),
            last_modified=raw.get("last_modified"),
        )
    except KeyError as exc:
        msg = f"Content item system attributes missing {exc.args[0]!r}"
        raise RepositoryError(msg) from exc


def _decode_asset(raw: dict[str, Any]) -> Asset:
    return Asset(
        name=str(raw.get("name", "")),
        url=str(raw.get("url", "")),
        description=raw.get("description"),
        type=raw.get("type"),
        width=raw.get("width"),
        height=raw.get("height"),
    )


def _decode_links(raw: Any) -> dict[str, ContentLink]:
    if not isinstance(raw, dict):
        return {}
    links: dict[str, ContentLink] = {}
    for item_id, link in raw.items():
        if not isinstance(link, dict):
            continue
        links[item_id] = ContentLink(
            item_id=item_id,
            codename=str(link.get("codename", "")),
            type=str(link.get("type", "")),
            url_slug=str(link.get("url_slug") or ""),
        )
    return links


class DeliveryClient:
    """Async client for one view (published or draft) of a Kontent.ai environment."""

    def __init__(
        self,
        *,
        base_url: str,
        environment_id: str,
        api_key: str = "",
        draft: bool = False,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.draft = draft
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        if draft:
            headers["X-KC-Wait-For-Loading-New-Content"] = "true"
        self._http = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/{environment_id}",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def fetch_by_type(
        self,
        content_type: str,
        *,
        language: str,
        expand_depth: int,
        slug_equals: str | None = None,
        order_by_descending: str | None = None,
        limit: int | None = None,
    ) -> tuple[ContentItem, ...]:
        # Filtering on system.language disables the CMS language fallback, so a
        # missing translation yields no item instead of default-language content.
        params: list[tuple[str, str]] = [
            ("system.type", content_type),
            ("system.language", language),
            ("language", language),
            ("depth", str(expand_depth)),
        ]
        if slug_equals is not None:
            params.append(("elements.slug", slug_equals))
        if order_by_descending:
            params.append(("order", f"elements.{order_by_descending}[desc]"))
        if limit is not None:
            params.append(("limit", str(limit)))

        payload = await self._get("/items", params)
        raw_items = payload.get("items")
        if not isinstance(raw_items, list):
            msg = "Repository response is missing the items list"
            raise RepositoryError(msg)
        decoder = _ItemDecoder(_modular_content(payload), expand_depth)
        return tuple(decoder.decode(raw) for raw in raw_items)

    async def fetch_by_codename(
        self,
        codename: str,
        *,
        language: str,
        expand_depth: int,
    ) -> ContentItem | None:
        if not _CODENAME_PATTERN.match(codename):
            logger.debug("Rejected malformed codename %r", codename)
            return None
        params = [("language", language), ("depth", str(expand_depth))]
        try:
            payload = await self._get(f"/items/{codename}", params)
        except RepositoryError as exc:
            if exc.status_code == 404:
                return None
            raise
        decoder = _ItemDecoder(_modular_content(payload), expand_depth)
        return decoder.decode(payload.get("item"))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get(self, path: str, params: list[tuple[str, str]]) -> dict[str, Any]:
        mode = "draft" if self.draft else "published"
        try:
            response = await self._http.get(path, params=params)
        except httpx.HTTPError as exc:
            msg = f"Content repository request failed ({mode}): {exc}"
            raise RepositoryError(msg, url=path) from exc

        if response.status_code != 200:
            msg = f"Content repository returned HTTP {response.status_code} ({mode})"
            raise RepositoryError(msg, url=str(response.url), status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"Content repository returned invalid JSON ({mode})"
            raise RepositoryError(msg, url=str(response.url)) from exc
        if not isinstance(payload, dict):
            msg = f"Content repository returned an unexpected payload ({mode})"
            raise RepositoryError(msg, url=str(response.url))
        return payload


def _modular_content(payload: dict[str, Any]) -> dict[str, Any]:
    modular = payload.get("modular_content")
    return modular if isinstance(modular, dict) else {}
