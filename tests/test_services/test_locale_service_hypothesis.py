"""Property-based tests for href localization."""

from __future__ import annotations

import string

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from kontent_site.services.locale_service import (
    LOCALES,
    localize_href,
    resolve_locale,
)

PROPERTY_SETTINGS = settings(
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)

_SEGMENT = st.text(alphabet=string.ascii_lowercase + string.digits + "-", min_size=1, max_size=12)
_PATH = st.lists(_SEGMENT, min_size=1, max_size=4).map(lambda parts: "/" + "/".join(parts))
_LOCALE = st.sampled_from(LOCALES)


class TestLocalizeHrefProperties:
    @PROPERTY_SETTINGS
    @given(path=_PATH, locale=_LOCALE)
    def test_site_paths_gain_exactly_one_locale_prefix(self, path: str, locale: str) -> None:
        localized = localize_href(path, locale)
        assert localized == f"/{locale}{path}"
        assert localized.removeprefix(f"/{locale}") == path

    @PROPERTY_SETTINGS
    @given(
        href=st.one_of(
            _PATH.map(lambda p: f"https://example.com{p}"),
            _SEGMENT.map(lambda s: f"#{s}"),
            _SEGMENT.map(lambda s: f"mailto:{s}@example.com"),
        ),
        locale=_LOCALE,
    )
    def test_passthrough_hrefs_are_unchanged(self, href: str, locale: str) -> None:
        assert localize_href(href, locale) == href

    @PROPERTY_SETTINGS
    @given(segment=st.text(max_size=8))
    def test_resolution_always_yields_a_supported_language(self, segment: str) -> None:
        resolution = resolve_locale(segment)
        assert resolution.canonical_locale in LOCALES
        assert resolution.is_valid == (segment in LOCALES)
