"""Tests for localized blog routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httpx import AsyncClient


class TestBlogIndex:
    async def test_lists_posts_newest_first(self, client: AsyncClient) -> None:
        resp = await client.get("/en/blog")
        assert resp.status_code == 200
        data = resp.json()
        assert [p["slug"] for p in data["posts"]] == [
            "second-post",
            "first-post",
            "undated-post",
        ]

    async def test_post_summaries(self, client: AsyncClient) -> None:
        resp = await client.get("/en/blog")
        first = resp.json()["posts"][1]
        assert first["url"] == "/en/blog/first-post"
        assert first["publish_date"] == "2024-01-15T09:00:00+00:00"
        assert first["image"]["url"] == "https://assets.example/first.png"
        assert resp.json()["posts"][2]["publish_date"] is None

    async def test_ui_strings_from_site_config(self, client: AsyncClient) -> None:
        data = (await client.get("/en/blog")).json()
        assert data["heading"] == "News"
        assert data["subtitle"] == "Latest updates"
        assert data["empty_message"] == "No posts yet"

    async def test_locale_without_posts_or_config(self, client: AsyncClient) -> None:
        data = (await client.get("/ro/blog")).json()
        assert data["posts"] == []
        assert data["heading"] == "Blog"
        assert data["locale"] == "ro"

    async def test_trailing_slash(self, client: AsyncClient) -> None:
        resp = await client.get("/en/blog/")
        assert resp.status_code == 200
        assert resp.json()["heading"] == "News"
        assert len(resp.json()["posts"]) == 3

    async def test_missing_locale_redirects(self, client: AsyncClient) -> None:
        resp = await client.get("/blog")
        assert resp.status_code == 307
        assert resp.headers["location"] == "/en/blog"

    async def test_unsupported_locale(self, client: AsyncClient) -> None:
        assert (await client.get("/fr/blog")).status_code == 404


class TestBlogPost:
    async def test_post_detail(self, client: AsyncClient) -> None:
        resp = await client.get("/en/blog/first-post")
        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "First post"
        assert data["summary"] == "The beginning"
        assert data["locale"] == "en"
        assert data["draft_mode"] is False

    async def test_body_links_and_embeds_are_resolved(self, client: AsyncClient) -> None:
        body = (await client.get("/en/blog/first-post")).json()["body_html"]
        assert '<a href="/en/about">about us</a>' in body
        assert "[Embedded: quote: Famous quote]" in body
        assert "<script" not in body
        assert "alert" not in body

    async def test_embedded_items_are_exposed(self, client: AsyncClient) -> None:
        data = (await client.get("/en/blog/first-post")).json()
        assert [item["system"]["codename"] for item in data["embedded_items"]] == ["quote_one"]
        assert data["embedded_items"][0]["elements"]["quote"] == "Ship it"

    async def test_trailing_slash(self, client: AsyncClient) -> None:
        resp = await client.get("/en/blog/first-post/")
        assert resp.status_code == 200
        assert resp.json()["codename"] == "first_post"

    async def test_unknown_post(self, client: AsyncClient) -> None:
        resp = await client.get("/en/blog/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Post not found"

    async def test_missing_translation(self, client: AsyncClient) -> None:
        assert (await client.get("/ro/blog/first-post")).status_code == 404
