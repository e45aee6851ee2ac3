"""The published and draft repository handles, built once per process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kontent_site.repository.delivery import DeliveryClient

if TYPE_CHECKING:
    import httpx

    from kontent_site.config import Settings
    from kontent_site.repository.base import ContentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryClients:
    """Both views of the content repository.

    Constructed explicitly at application startup and passed to request
    handlers through ``app.state``; handlers never build clients themselves.
    """

    published: ContentRepository
    draft: ContentRepository

    def for_mode(self, draft: bool) -> ContentRepository:
        return self.draft if draft else self.published

    async def aclose(self) -> None:
        await self.published.aclose()
        await self.draft.aclose()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RepositoryClients:
        """Build both delivery clients from settings.

        ``transport`` replaces the network transport of both clients (tests).
        """
        published = DeliveryClient(
            base_url=settings.kontent_delivery_url,
            environment_id=settings.kontent_environment_id,
            api_key=settings.kontent_delivery_api_key,
            draft=False,
            timeout=settings.kontent_timeout_seconds,
            transport=transport,
        )
        if not settings.kontent_preview_api_key:
            logger.warning("KONTENT_PREVIEW_API_KEY is not set; draft reads will be rejected")
        draft = DeliveryClient(
            base_url=settings.kontent_preview_url,
            environment_id=settings.kontent_environment_id,
            api_key=settings.kontent_preview_api_key,
            draft=True,
            timeout=settings.kontent_timeout_seconds,
            transport=transport,
        )
        return cls(published=published, draft=draft)
