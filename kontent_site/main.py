"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from kontent_site.api.blog import router as blog_router
from kontent_site.api.draft import router as draft_router
from kontent_site.api.health import router as health_router
from kontent_site.api.pages import router as pages_router
from kontent_site.api.site import router as site_router
from kontent_site.config import Settings
from kontent_site.exceptions import InternalServerError, RepositoryError
from kontent_site.middleware.draft_cookies import DraftCookieMiddleware
from kontent_site.repository.clients import RepositoryClients
from kontent_site.services.rate_limit_service import InMemoryRateLimiter

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.responses import Response

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.INFO if debug else logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: build the repository clients once, close them on shutdown."""
    settings: Settings = app.state.settings
    settings.validate_runtime_security()
    _configure_logging(settings.debug)
    logger.info(
        "Starting Kontent site (environment=%s, debug=%s)", settings.environment, settings.debug
    )

    try:
        clients = RepositoryClients.from_settings(settings)
    except Exception as exc:
        logger.critical("Failed to create content repository clients: %s", exc)
        raise
    app.state.repository_clients = clients

    yield

    try:
        await clients.aclose()
    except Exception as exc:
        logger.error("Error closing repository clients: %s", exc, exc_info=True)

    logger.info("Kontent site stopped")


def _default_origins(settings: Settings) -> list[str]:
    if settings.cors_origins:
        return settings.cors_origins
    return ["http://localhost:3000", "http://localhost:8000"] if settings.debug else []


def _default_hosts(settings: Settings) -> list[str]:
    if settings.trusted_hosts:
        return settings.trusted_hosts
    return ["localhost", "127.0.0.1", "::1", "test", "testserver"] if settings.debug else []


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(DraftCookieMiddleware)
    # The rendering layer only reads.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_default_origins(settings),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    hosts = _default_hosts(settings)
    if hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=hosts)

    if not settings.security_headers_enabled:
        return

    # The CMS preview pane embeds the site, so framing is limited by CSP only.
    site_headers = {
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Content-Security-Policy": "frame-ancestors "
        + " ".join(["'self'", *settings.frame_ancestors]),
    }

    @app.middleware("http")
    async def security_headers(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        for name, value in site_headers.items():
            response.headers.setdefault(name, value)
        return response


def _server_error(request: Request, exc: Exception, label: str) -> JSONResponse:
    logger.error("%s in %s %s: %s", label, request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    docs_enabled = settings.debug or settings.expose_docs

    app = FastAPI(
        title="Kontent Site",
        description="Localized page, blog and draft-preview routing for a headless CMS",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.rate_limiter = InMemoryRateLimiter()

    _install_middleware(app, settings)

    # API routers first: the locale routes below match any first path segment.
    app.include_router(health_router)
    app.include_router(site_router)
    app.include_router(draft_router)
    app.include_router(blog_router)
    app.include_router(pages_router)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = [
            {
                "field": str(err["loc"][-1]) if err.get("loc") else "unknown",
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, problems)
        return JSONResponse(status_code=422, content={"detail": problems})

    @app.exception_handler(RepositoryError)
    async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
        logger.error(
            "RepositoryError in %s %s: %s (url=%s, status=%s)",
            request.method,
            request.url.path,
            exc,
            exc.url,
            exc.status_code,
        )
        return JSONResponse(status_code=502, content={"detail": "Content repository unavailable"})

    @app.exception_handler(InternalServerError)
    async def internal_server_error_handler(
        request: Request, exc: InternalServerError
    ) -> JSONResponse:
        return _server_error(request, exc, type(exc).__name__)

    @app.exception_handler(TypeError)
    async def type_error_handler(request: Request, exc: TypeError) -> JSONResponse:
        return _server_error(request, exc, "[BUG] TypeError")

    return app


app = create_app()


def cli_entry() -> None:
    """Run the site with uvicorn using the configured bind address."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        "kontent_site.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
