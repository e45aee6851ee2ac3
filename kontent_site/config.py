"""Application configuration loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Kontent site application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    secret_key: str = "change-me-in-production"
    debug: bool = False
    environment: Literal["development", "production"] = "production"
    expose_docs: bool = False

    # Content repository
    kontent_environment_id: str = ""
    kontent_preview_api_key: str = ""
    kontent_delivery_api_key: str = ""
    kontent_preview_secret: str = ""
    kontent_delivery_url: str = "https://deliver.kontent.ai"
    kontent_preview_url: str = "https://preview-deliver.kontent.ai"
    kontent_timeout_seconds: float = Field(default=15.0, gt=0)

    # Data integrity: what to do when several pages share a slug in one language
    duplicate_slug_policy: Literal["first", "error"] = "first"

    # Draft mode
    draft_cookie_name: str = "kontent_draft"
    draft_cookie_max_age_seconds: int = Field(default=3600, ge=60)
    draft_secret_max_failures: int = Field(default=10, ge=1)
    draft_secret_window_seconds: int = Field(default=300, ge=1)

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # CORS
    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=list)

    # Response hardening
    security_headers_enabled: bool = True
    frame_ancestors: list[str] = Field(default_factory=lambda: ["https://app.kontent.ai"])

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate_runtime_security(self) -> None:
        """Validate security-critical production settings."""
        if self.debug:
            return

        violations: list[str] = []
        if self.secret_key == "change-me-in-production" or len(self.secret_key) < 32:
            violations.append(
                "SECRET_KEY must be overridden with a high-entropy value (>=32 chars)"
            )
        if not self.kontent_environment_id:
            violations.append("KONTENT_ENVIRONMENT_ID must be configured")
        if self.kontent_preview_api_key and not self.kontent_preview_secret:
            violations.append(
                "KONTENT_PREVIEW_SECRET must be set when a preview API key is configured"
            )
        if not self.trusted_hosts:
            violations.append("TRUSTED_HOSTS must be configured in production")

        if violations:
            joined = "; ".join(violations)
            raise ValueError(f"Insecure production configuration: {joined}")
