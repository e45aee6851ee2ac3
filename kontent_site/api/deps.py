"""Shared API dependencies: settings, repository clients, draft mode."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from kontent_site.config import Settings
from kontent_site.repository.clients import RepositoryClients
from kontent_site.services.draft_service import is_draft_token_valid


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_repository_clients(request: Request) -> RepositoryClients:
    """Get the published and draft repository handles from app state."""
    clients: RepositoryClients = request.app.state.repository_clients
    return clients


def get_draft_mode(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> bool:
    """Return True when the request carries a valid draft-mode session cookie."""
    token = request.cookies.get(settings.draft_cookie_name)
    return is_draft_token_valid(token, settings.secret_key)


def get_client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",", maxsplit=1)[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
