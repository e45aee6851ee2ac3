"""Block dispatch: route each page-body block to its renderer by type tag.

The set of block kinds is closed. Adding a kind means adding a ``BlockKind``
member and a ``match`` arm in ``_renderer_for``; type checkers flag the
missing arm through ``assert_never``. Tags outside the set are handled by the
unknown-kind policy in ``dispatch``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, assert_never

from kontent_site.models import ItemReference

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from kontent_site.models import LinkedValue

logger = logging.getLogger(__name__)

UNKNOWN_COMPONENT = "UnknownBlock"
UNRESOLVED_COMPONENT = "UnresolvedBlock"


class BlockKind(StrEnum):
    HERO = "hero"
    FEATURE_GRID = "feature_grid"
    TEXT_WITH_IMAGE = "text_with_image"
    TESTIMONIALS = "testimonials"
    CALL_TO_ACTION = "call_to_action"
    PRICING_TABLE = "pricing_table"
    CONTACT_FORM = "contact_form"
    LOGO_CLOUD = "logo_cloud"
    FAQ = "faq"
    RICH_TEXT = "rich_text_block"


@dataclass(frozen=True)
class RenderDescriptor:
    """What the rendering layer needs to draw one block.

    ``fields`` are the block's element values exactly as fetched, nested card
    sequences included. ``locale`` is set only for renderers that localize
    their own links.
    """

    component: str
    kind: str
    codename: str
    item_id: str | None = None
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    locale: str | None = None


def parse_block_kind(type_tag: str) -> BlockKind | None:
    try:
        return BlockKind(type_tag)
    except ValueError:
        return None


def _renderer_for(kind: BlockKind) -> tuple[str, bool]:
    """Return (component name, whether the renderer needs the locale)."""
    match kind:
        case BlockKind.HERO:
            return "HeroBlock", True
        case BlockKind.FEATURE_GRID:
            return "FeatureGridBlock", False
        case BlockKind.TEXT_WITH_IMAGE:
            return "TextWithImageBlock", False
        case BlockKind.TESTIMONIALS:
            return "TestimonialsBlock", False
        case BlockKind.CALL_TO_ACTION:
            return "CallToActionBlock", True
        case BlockKind.PRICING_TABLE:
            return "PricingTableBlock", True
        case BlockKind.CONTACT_FORM:
            return "ContactFormBlock", False
        case BlockKind.LOGO_CLOUD:
            return "LogoCloudBlock", False
        case BlockKind.FAQ:
            return "FAQBlock", False
        case BlockKind.RICH_TEXT:
            return "RichTextBlock", False
        case _:
            assert_never(kind)


def dispatch(block: LinkedValue, *, locale: str, development: bool) -> RenderDescriptor | None:
    """Select the renderer for a block.

    Unknown type tags and unexpanded references produce a visible diagnostic
    descriptor in development and ``None`` (render nothing) in production.
    """
    if isinstance(block, ItemReference):
        logger.debug("Block %s was not expanded (depth limit reached)", block.codename)
        if not development:
            return None
        return RenderDescriptor(
            component=UNRESOLVED_COMPONENT,
            kind="unresolved",
            codename=block.codename,
            fields=MappingProxyType({"codename": block.codename}),
        )

    kind = parse_block_kind(block.type)
    if kind is None:
        if development:
            logger.warning("Unknown component type %r (item %s)", block.type, block.codename)
            return RenderDescriptor(
                component=UNKNOWN_COMPONENT,
                kind="unknown",
                codename=block.codename,
                item_id=block.id,
                fields=MappingProxyType({"type": block.type}),
            )
        logger.debug("Skipping unknown component type %r (item %s)", block.type, block.codename)
        return None

    component, needs_locale = _renderer_for(kind)
    return RenderDescriptor(
        component=component,
        kind=kind.value,
        codename=block.codename,
        item_id=block.id,
        fields=block.elements,
        locale=locale if needs_locale else None,
    )


def dispatch_body(
    body: Iterable[LinkedValue], *, locale: str, development: bool
) -> list[RenderDescriptor]:
    """Dispatch a page body in order, dropping blocks that render nothing."""
    descriptors: list[RenderDescriptor] = []
    for block in body:
        descriptor = dispatch(block, locale=locale, development=development)
        if descriptor is not None:
            descriptors.append(descriptor)
    return descriptors
