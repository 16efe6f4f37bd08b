"""Test settings loading and validation."""

import pytest
from pydantic import ValidationError

from claimdesk.core.config import Settings, clear_settings_cache, get_settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.app_name == "ClaimDesk"
        assert settings.number_max_attempts == 20
        assert settings.is_development

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_ENV", "production")
        monkeypatch.setenv("NUMBER_MAX_ATTEMPTS", "3")

        settings = Settings()

        assert settings.is_production
        assert settings.number_max_attempts == 3

    def test_pool_max_must_cover_min(self) -> None:
        with pytest.raises(ValidationError, match="database_pool_max"):
            Settings(database_pool_min=10, database_pool_max=5)

    def test_cors_origins_must_be_urls(self) -> None:
        with pytest.raises(ValidationError, match="Invalid CORS origin"):
            Settings(api_cors_origins=["localhost:3000"])

    def test_unknown_environment_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(api_env="qa")

    def test_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(number_max_attempts=0)


class TestSettingsCache:
    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_clear_cache(self) -> None:
        first = get_settings()
        clear_settings_cache()

        assert get_settings() is not first
