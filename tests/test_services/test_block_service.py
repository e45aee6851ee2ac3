"""Tests for block dispatch."""

from __future__ import annotations

import logging
from types import MappingProxyType

import pytest

from kontent_site.models import ContentItem, ItemReference, SystemAttributes
from kontent_site.services.block_service import (
    UNKNOWN_COMPONENT,
    UNRESOLVED_COMPONENT,
    BlockKind,
    dispatch,
    dispatch_body,
    parse_block_kind,
)


def _block(codename: str, type_tag: str, **elements: object) -> ContentItem:
    return ContentItem(
        system=SystemAttributes(
            id=f"id-{codename}",
            codename=codename,
            type=type_tag,
            name=codename,
            language="default",
        ),
        elements=MappingProxyType(dict(elements)),
    )


class TestParseBlockKind:
    @pytest.mark.parametrize("kind", list(BlockKind))
    def test_every_kind_round_trips_from_its_tag(self, kind: BlockKind) -> None:
        assert parse_block_kind(kind.value) is kind

    def test_unknown_tag(self) -> None:
        assert parse_block_kind("carousel") is None


class TestDispatch:
    @pytest.mark.parametrize("kind", list(BlockKind))
    def test_every_kind_has_a_renderer(self, kind: BlockKind) -> None:
        descriptor = dispatch(_block("b", kind.value), locale="en", development=False)
        assert descriptor is not None
        assert descriptor.kind == kind.value
        assert descriptor.component.endswith("Block")

    def test_locale_passed_to_link_rendering_blocks(self) -> None:
        descriptor = dispatch(_block("hero", "hero"), locale="ro", development=False)
        assert descriptor is not None
        assert descriptor.component == "HeroBlock"
        assert descriptor.locale == "ro"

    def test_locale_not_passed_to_plain_blocks(self) -> None:
        descriptor = dispatch(_block("faq", "faq"), locale="ro", development=False)
        assert descriptor is not None
        assert descriptor.locale is None

    def test_fields_are_the_fetched_elements(self) -> None:
        card = _block("card", "feature_card", title="Fast")
        grid = _block("grid", "feature_grid", heading="Features", cards=(card,))
        descriptor = dispatch(grid, locale="en", development=False)
        assert descriptor is not None
        assert descriptor.fields["heading"] == "Features"
        assert descriptor.fields["cards"] == (card,)
        assert descriptor.item_id == "id-grid"

    def test_unknown_kind_renders_nothing_in_production(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG):
            descriptor = dispatch(_block("x", "carousel"), locale="en", development=False)
        assert descriptor is None
        assert "carousel" in caplog.text

    def test_unknown_kind_shows_diagnostic_in_development(self) -> None:
        descriptor = dispatch(_block("x", "carousel"), locale="en", development=True)
        assert descriptor is not None
        assert descriptor.component == UNKNOWN_COMPONENT
        assert descriptor.fields["type"] == "carousel"

    def test_unexpanded_reference_in_production(self) -> None:
        assert dispatch(ItemReference("deep"), locale="en", development=False) is None

    def test_unexpanded_reference_in_development(self) -> None:
        descriptor = dispatch(ItemReference("deep"), locale="en", development=True)
        assert descriptor is not None
        assert descriptor.component == UNRESOLVED_COMPONENT
        assert descriptor.codename == "deep"


class TestDispatchBody:
    def test_keeps_authored_order_and_drops_unrenderable_blocks(self) -> None:
        body = (
            _block("one", "hero"),
            _block("two", "carousel"),
            ItemReference("three"),
            _block("four", "faq"),
        )
        descriptors = dispatch_body(body, locale="en", development=False)
        assert [d.codename for d in descriptors] == ["one", "four"]

    def test_development_keeps_diagnostics_in_place(self) -> None:
        body = (_block("one", "hero"), _block("two", "carousel"), ItemReference("three"))
        descriptors = dispatch_body(body, locale="en", development=True)
        assert [d.component for d in descriptors] == [
            "HeroBlock",
            UNKNOWN_COMPONENT,
            UNRESOLVED_COMPONENT,
        ]

    def test_empty_body(self) -> None:
        assert dispatch_body((), locale="en", development=True) == []
