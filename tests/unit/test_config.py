"""
Unit tests for shared configuration.
"""

import pytest
from pydantic import ValidationError

from shared.config import DEFAULT_TTL_SECONDS, CacheSettings, get_settings


class TestCacheSettings:
    """Test cases for CacheSettings."""

    def test_defaults(self):
        settings = CacheSettings()

        assert settings.redis_url == "redis://localhost:6379/0"
        assert settings.disabled is False
        assert settings.default_ttl == DEFAULT_TTL_SECONDS == 3600
        assert settings.enable_metrics is False
        assert settings.metrics_port is None
        assert settings.log_level == "info"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CACHE_REDIS_URL", "redis://cache:6380/3")
        monkeypatch.setenv("CACHE_DISABLED", "true")
        monkeypatch.setenv("CACHE_DEFAULT_TTL", "600")

        settings = get_settings()

        assert settings.redis_url == "redis://cache:6380/3"
        assert settings.disabled is True
        assert settings.default_ttl == 600

    def test_explicit_overrides(self):
        assert get_settings(default_ttl=30).default_ttl == 30

    @pytest.mark.parametrize("default_ttl", [0, -60])
    def test_non_positive_ttl_rejected(self, default_ttl):
        with pytest.raises(ValidationError):
            CacheSettings(default_ttl=default_ttl)

    def test_metrics_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("CACHE_ENABLE_METRICS", "true")
        monkeypatch.setenv("CACHE_METRICS_PORT", "9464")

        settings = get_settings()

        assert settings.enable_metrics is True
        assert settings.metrics_port == 9464

    @pytest.mark.parametrize("metrics_port", [0, 70000])
    def test_invalid_metrics_port_rejected(self, metrics_port):
        with pytest.raises(ValidationError):
            CacheSettings(metrics_port=metrics_port)
