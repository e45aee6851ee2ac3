"""Draft cookie middleware: make draft-mode cookies usable inside the CMS preview iframe."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

DRAFT_PATH_PREFIXES: tuple[str, ...] = ("/api/draft", "/api/disable-draft")

_SAMESITE_RE = re.compile(r";\s*samesite=[^;]*", re.IGNORECASE)
_SECURE_RE = re.compile(r";\s*secure\s*(?=;|$)", re.IGNORECASE)


def rewrite_cookie_for_iframe(header_value: str) -> str:
    """Rewrite a Set-Cookie value to ``SameSite=None; Secure``.

    Browsers drop ``SameSite=Lax`` cookies set from within a cross-site
    iframe, and ``SameSite=None`` is only honored together with ``Secure``.
    """
    value = _SECURE_RE.sub("", _SAMESITE_RE.sub("", header_value)).rstrip("; ")
    return f"{value}; SameSite=None; Secure"


class DraftCookieMiddleware(BaseHTTPMiddleware):
    """Rewrite Set-Cookie headers on the draft-mode endpoints only.

    Every other response keeps the cookie attributes it was given.
    """

    def __init__(self, app: ASGIApp, path_prefixes: Sequence[str] = DRAFT_PATH_PREFIXES) -> None:
        super().__init__(app)
        self.path_prefixes = tuple(path_prefixes)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        if not request.url.path.startswith(self.path_prefixes):
            return response

        cookies = response.headers.getlist("set-cookie")
        if not cookies:
            return response

        del response.headers["set-cookie"]
        for cookie in cookies:
            response.headers.append("set-cookie", rewrite_cookie_for_iframe(cookie))
        logger.debug("Rewrote %d draft cookie(s) on %s", len(cookies), request.url.path)
        return response
