"""Locale resolution: URL locale segments <-> CMS language codenames."""

from __future__ import annotations

import re
from dataclasses import dataclass

LOCALES: tuple[str, ...] = ("en", "ro")
DEFAULT_LOCALE = "en"

# The CMS names its primary language "default" rather than by language code.
LOCALE_TO_LANGUAGE: dict[str, str] = {
    "en": "default",
    "ro": "ro",
}

LOCALE_TO_DATE_LOCALE: dict[str, str] = {
    "en": "en-US",
    "ro": "ro-RO",
}

LOCALE_DISPLAY_NAMES: dict[str, str] = {
    "en": "EN",
    "ro": "RO",
}

_LOCALE_SHAPE = re.compile(r"^[a-z]{2}(-[a-z]{2})?$", re.IGNORECASE)
_PASSTHROUGH_PREFIXES = ("http", "#", "mailto:")


@dataclass(frozen=True)
class LocaleResolution:
    """Outcome of resolving a URL locale segment.

    For an invalid segment ``canonical_locale`` and ``cms_language`` hold the
    default locale's values, for callers that fail soft to the default.
    """

    is_valid: bool
    canonical_locale: str
    cms_language: str


def is_valid_locale(value: str | None) -> bool:
    return value in LOCALE_TO_LANGUAGE


def resolve_locale(segment: str | None) -> LocaleResolution:
    """Map a URL locale segment to its CMS language."""
    if segment is not None and is_valid_locale(segment):
        return LocaleResolution(
            is_valid=True,
            canonical_locale=segment,
            cms_language=LOCALE_TO_LANGUAGE[segment],
        )
    return LocaleResolution(
        is_valid=False,
        canonical_locale=DEFAULT_LOCALE,
        cms_language=LOCALE_TO_LANGUAGE[DEFAULT_LOCALE],
    )


def looks_like_locale(segment: str) -> bool:
    """Return True for segments shaped like a locale code (``fr``, ``pt-br``)."""
    return bool(_LOCALE_SHAPE.match(segment))


def localize_href(href: str, locale: str) -> str:
    """Prefix a site-relative href with the locale.

    External URLs, in-page anchors and ``mailto:`` links pass through
    unchanged, as does the empty href. The prefix is added once per call;
    callers must not localize an already localized href.
    """
    if not href or href.startswith(_PASSTHROUGH_PREFIXES):
        return href
    return f"/{locale}{href if href.startswith('/') else f'/{href}'}"


def locale_root(locale: str) -> str:
    return f"/{locale}"


def localize_path(path: str, locale: str) -> str:
    """Localize a site-relative route path, mapping ``/`` to the locale root."""
    if path in ("", "/"):
        return locale_root(locale)
    return localize_href(path, locale)


def is_site_relative(href: str) -> bool:
    """Return True for paths on this site (``/x``), False for ``//host`` or URLs."""
    return href.startswith("/") and not href.startswith(("//", "/\\"))


def default_locale_path(path: str) -> str:
    """Return the default-locale equivalent of a path that lacks a locale prefix."""
    return localize_path(path if path.startswith("/") else f"/{path}", DEFAULT_LOCALE)


def ensure_locale_prefix(path: str, locale: str) -> str:
    """Localize a site-relative path unless it already starts with a supported locale."""
    first_segment = path.lstrip("/").split("/", 1)[0]
    if is_valid_locale(first_segment):
        return path
    return localize_path(path, locale)
