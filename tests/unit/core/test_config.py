"""
Unit tests for application settings.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from gameclub.core.config import Settings, get_settings


class TestSettings:
    def test_test_environment_loaded(self):
        settings = get_settings()

        assert settings.ENVIRONMENT == "test"
        assert settings.DATABASE_URL.startswith("sqlite+aiosqlite://")
        assert settings.CACHE_ENABLED is False

    def test_cache_ttl_is_timedelta(self):
        assert Settings(CACHE_TTL_SECONDS=60).cache_ttl == timedelta(seconds=60)

    def test_rejects_zero_ttl(self):
        with pytest.raises(ValidationError):
            Settings(CACHE_TTL_SECONDS=0)

    def test_rejects_sync_database_driver(self):
        with pytest.raises(ValidationError):
            Settings(DATABASE_URL="postgresql://user:pw@localhost/gameclub")

    def test_rejects_unknown_environment(self):
        with pytest.raises(ValidationError):
            Settings(ENVIRONMENT="qa")

    def test_log_level_normalized(self):
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_cors_origins_list(self):
        settings = Settings(CORS_ORIGINS="http://a.test, http://b.test,")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
        assert not settings.is_production
