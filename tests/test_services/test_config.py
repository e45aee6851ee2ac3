"""Tests for application configuration."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from kontent_site.config import Settings

_STRONG_KEY = "k" * 40


def _production(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "_env_file": None,
        "secret_key": _STRONG_KEY,
        "kontent_environment_id": "env-id",
        "trusted_hosts": ["example.com"],
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


class TestSettings:
    def test_default_settings(self) -> None:
        s = Settings(_env_file=None)
        assert s.secret_key == "change-me-in-production"
        assert s.debug is False
        assert s.environment == "production"
        assert s.port == 8000
        assert s.duplicate_slug_policy == "first"
        assert s.kontent_delivery_url == "https://deliver.kontent.ai"
        assert s.kontent_preview_url == "https://preview-deliver.kontent.ai"

    def test_frame_ancestors_default_allows_cms(self) -> None:
        assert Settings(_env_file=None).frame_ancestors == ["https://app.kontent.ai"]

    def test_is_development(self) -> None:
        assert Settings(_env_file=None, environment="development").is_development
        assert not Settings(_env_file=None).is_development

    def test_settings_from_fixture(self, test_settings: Settings) -> None:
        assert test_settings.secret_key == "test-secret-key-with-at-least-32-characters"
        assert test_settings.debug is True

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KONTENT_ENVIRONMENT_ID", "from-env")
        monkeypatch.setenv("DUPLICATE_SLUG_POLICY", "error")
        s = Settings(_env_file=None)
        assert s.kontent_environment_id == "from-env"
        assert s.duplicate_slug_policy == "error"


class TestRuntimeSecurity:
    def test_valid_production_config(self) -> None:
        _production().validate_runtime_security()

    def test_debug_skips_checks(self) -> None:
        Settings(_env_file=None, debug=True).validate_runtime_security()

    def test_default_secret_rejected(self) -> None:
        with pytest.raises(ValueError, match="SECRET_KEY"):
            _production(secret_key="change-me-in-production").validate_runtime_security()

    def test_short_secret_rejected(self) -> None:
        with pytest.raises(ValueError, match="SECRET_KEY"):
            _production(secret_key="short").validate_runtime_security()

    def test_missing_environment_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="KONTENT_ENVIRONMENT_ID"):
            _production(kontent_environment_id="").validate_runtime_security()

    def test_preview_key_requires_preview_secret(self) -> None:
        with pytest.raises(ValueError, match="KONTENT_PREVIEW_SECRET"):
            _production(kontent_preview_api_key="pk").validate_runtime_security()

    def test_trusted_hosts_required(self) -> None:
        with pytest.raises(ValueError, match="TRUSTED_HOSTS"):
            _production(trusted_hosts=[]).validate_runtime_security()


class TestCliEntry:
    def test_cli_entry_uses_app_settings(self) -> None:
        """cli_entry() should use the global app's settings, not create a new Settings()."""
        from kontent_site.main import app, cli_entry

        original_settings = getattr(app.state, "settings", None)
        app.state.settings = Settings(_env_file=None, host="127.0.0.1", port=9999, debug=True)

        try:
            with patch("uvicorn.run") as mock_run:
                cli_entry()

            mock_run.assert_called_once_with(
                "kontent_site.main:app",
                host="127.0.0.1",
                port=9999,
                reload=True,
            )
        finally:
            app.state.settings = original_settings
