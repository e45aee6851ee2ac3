"""Shared test fixtures for the Kontent site."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from kontent_site.config import Settings
from kontent_site.main import create_app
from kontent_site.repository.clients import RepositoryClients
from tests.fake_delivery import (
    FakeDelivery,
    asset,
    content_item,
    date_time,
    linked,
    rich_text,
    slug,
    text,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

TEST_SECRET_KEY = "test-secret-key-with-at-least-32-characters"
TEST_PREVIEW_SECRET = "preview-secret-for-tests"
TEST_ENVIRONMENT_ID = "test-env"
ABOUT_PAGE_ID = "aaaaaaaa-0000-0000-0000-000000000001"


@asynccontextmanager
async def create_test_client(
    settings: Settings, fake: FakeDelivery
) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client backed by the fake Delivery API.

    Manually performs the work of the application lifespan because
    ASGITransport does not trigger it.
    """
    app = create_app(settings)
    settings.validate_runtime_security()
    clients = RepositoryClients.from_settings(settings, transport=fake.transport())
    app.state.repository_clients = clients

    # https so that Secure cookies set by the draft endpoints are sent back.
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="https://test",
    ) as ac:
        yield ac

    await clients.aclose()


def populate_sample_content(fake: FakeDelivery) -> FakeDelivery:
    """Fill the fake repository with a small two-language site."""
    # Site configuration and navigation
    fake.add(
        content_item(
            "site_config",
            "site_config",
            site_name=text("Acme Test"),
            logo=asset("logo.png", "https://assets.example/logo.png", description="Acme logo"),
            header_navigation=linked("nav_home", "nav_about"),
            footer=linked("footer"),
            blog_heading=text("News"),
            blog_subtitle=text("Latest updates"),
            blog_empty_message=text("No posts yet"),
        )
    )
    fake.add(content_item("nav_home", "navigation_item", label=text("Home"), url=text("/")))
    fake.add(
        content_item(
            "nav_about",
            "navigation_item",
            label=text("About"),
            url=text("/about"),
            children=linked("nav_team", "nav_about"),
        )
    )
    fake.add(
        content_item(
            "nav_team",
            "navigation_item",
            label=text("Team"),
            url=text("/about/team"),
            children=linked("nav_home"),
        )
    )
    fake.add(
        content_item(
            "nav_github",
            "navigation_item",
            label=text("GitHub"),
            url=text("https://github.com/acme"),
        )
    )
    fake.add(
        content_item(
            "footer",
            "footer",
            columns=linked("footer_company"),
            copyright_text=text("Acme Inc. All rights reserved."),
            social_links=linked("nav_github"),
        )
    )
    fake.add(
        content_item(
            "footer_company", "footer_column", title=text("Company"), links=linked("nav_about")
        )
    )

    # Pages and blocks
    fake.add(
        content_item(
            "home",
            "page",
            title=text("Home"),
            slug=slug(""),
            meta_description=text("Welcome to Acme"),
            body=linked("hero_main", "mystery_block", "features"),
        )
    )
    fake.add(
        content_item(
            "hero_main",
            "hero",
            headline=text("Welcome"),
            cta_href=text("/contact"),
        )
    )
    fake.add(content_item("mystery_block", "carousel", caption=text("Spinning")))
    fake.add(
        content_item(
            "features",
            "feature_grid",
            heading=text("Features"),
            cards=linked("card_fast", "card_safe"),
        )
    )
    fake.add(content_item("card_fast", "feature_card", title=text("Fast")))
    fake.add(content_item("card_safe", "feature_card", title=text("Safe")))
    fake.add(
        content_item(
            "about",
            "page",
            item_id=ABOUT_PAGE_ID,
            title=text("About us"),
            slug=slug("about"),
            meta_description=text("Who we are"),
            body=linked("about_cta"),
        )
    )
    fake.add(
        content_item(
            "about_cta",
            "call_to_action",
            label=text("Contact us"),
            href=text("/contact"),
        )
    )
    fake.add(
        content_item(
            "upcoming",
            "page",
            title=text("Upcoming launch"),
            slug=slug("upcoming"),
            meta_description=text(""),
            body=linked(),
        ),
        published=False,
    )

    # Romanian variants: home only, no about page
    fake.add(
        content_item(
            "home",
            "page",
            language="ro",
            title=text("Acasă"),
            slug=slug(""),
            meta_description=text("Bine ați venit"),
            body=linked("hero_main"),
        )
    )
    fake.add(
        content_item(
            "hero_main",
            "hero",
            language="ro",
            headline=text("Bun venit"),
            cta_href=text("/contact"),
        )
    )

    # Blog
    fake.add(
        content_item(
            "first_post",
            "blog_post",
            title=text("First post"),
            slug=slug("first-post"),
            summary=text("The beginning"),
            publish_date=date_time("2024-01-15T09:00:00Z"),
            image=asset("first.png", "https://assets.example/first.png"),
            body=rich_text(
                f'<p>Read <a data-item-id="{ABOUT_PAGE_ID}" href="">about us</a>.</p>'
                '<object type="application/kenticocloud" data-type="item" '
                'data-rel="component" data-codename="quote_one"></object>'
                "<script>alert(1)</script>",
                modular_content=("quote_one",),
                links={ABOUT_PAGE_ID: {"codename": "about", "type": "page", "url_slug": "about"}},
            ),
        )
    )
    fake.add(content_item("quote_one", "quote", name="Famous quote", quote=text("Ship it")))
    fake.add(
        content_item(
            "second_post",
            "blog_post",
            title=text("Second post"),
            slug=slug("second-post"),
            summary=text("More news"),
            publish_date=date_time("2024-06-01T09:00:00Z"),
            body=rich_text("<p>Second</p>"),
        )
    )
    fake.add(
        content_item(
            "undated_post",
            "blog_post",
            title=text("Undated post"),
            slug=slug("undated-post"),
            summary=text(""),
            publish_date=date_time(None),
            body=rich_text(""),
        )
    )
    return fake


@pytest.fixture
def fake_delivery() -> FakeDelivery:
    """A fake repository holding the sample site."""
    return populate_sample_content(FakeDelivery(TEST_ENVIRONMENT_ID))


@pytest.fixture
async def repository_clients(fake_delivery: FakeDelivery) -> AsyncGenerator[RepositoryClients]:
    """Published and draft clients talking to the fake repository."""
    clients = RepositoryClients.from_settings(make_settings(), transport=fake_delivery.transport())
    yield clients
    await clients.aclose()


def make_settings(**overrides: object) -> Settings:
    """Test settings: development mode with draft mode fully configured."""
    values: dict[str, object] = {
        "secret_key": TEST_SECRET_KEY,
        "debug": True,
        "environment": "development",
        "kontent_environment_id": TEST_ENVIRONMENT_ID,
        "kontent_preview_api_key": "preview-api-key",
        "kontent_preview_secret": TEST_PREVIEW_SECRET,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
async def client(
    test_settings: Settings, fake_delivery: FakeDelivery
) -> AsyncGenerator[AsyncClient]:
    async with create_test_client(test_settings, fake_delivery) as ac:
        yield ac
