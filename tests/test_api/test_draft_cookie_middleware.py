"""Tests for the draft cookie rewriting middleware."""

from __future__ import annotations

from fastapi import FastAPI, Response
from httpx import ASGITransport, AsyncClient

from kontent_site.middleware.draft_cookies import DraftCookieMiddleware, rewrite_cookie_for_iframe


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(DraftCookieMiddleware)

    @app.get("/api/draft")
    async def draft(response: Response) -> dict[str, str]:
        response.set_cookie("a", "1", samesite="lax", httponly=True)
        response.set_cookie("b", "2", samesite="lax")
        return {}

    @app.get("/other")
    async def other(response: Response) -> dict[str, str]:
        response.set_cookie("a", "1", samesite="lax")
        return {}

    return app


class TestRewriteCookieForIframe:
    def test_lax_becomes_none_and_secure(self) -> None:
        result = rewrite_cookie_for_iframe("a=1; HttpOnly; Path=/; SameSite=lax")
        assert result == "a=1; HttpOnly; Path=/; SameSite=None; Secure"

    def test_secure_is_not_duplicated(self) -> None:
        result = rewrite_cookie_for_iframe("a=1; Path=/; SameSite=Lax; Secure")
        assert result == "a=1; Path=/; SameSite=None; Secure"

    def test_cookie_without_samesite(self) -> None:
        assert rewrite_cookie_for_iframe("a=1; Path=/") == "a=1; Path=/; SameSite=None; Secure"


class TestDraftCookieMiddleware:
    async def test_rewrites_every_cookie_on_draft_paths(self) -> None:
        async with AsyncClient(transport=ASGITransport(app=_app()), base_url="https://test") as ac:
            resp = await ac.get("/api/draft")
        cookies = resp.headers.get_list("set-cookie")
        assert len(cookies) == 2
        assert all(c.endswith("SameSite=None; Secure") for c in cookies)

    async def test_other_paths_are_untouched(self) -> None:
        async with AsyncClient(transport=ASGITransport(app=_app()), base_url="https://test") as ac:
            resp = await ac.get("/other")
        cookie = resp.headers["set-cookie"]
        assert "SameSite=lax" in cookie
        assert "Secure" not in cookie
