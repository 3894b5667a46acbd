"""
Tests for Pydantic settings loading and validation.
"""

import pytest
from pydantic import ValidationError

from services.identity.settings import IdentitySettings, get_settings, settings


class TestIdentitySettings:
    """Test settings defaults and environment overrides."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("LOG_LEVEL", "LOG_FORMAT", "SERVICE_NAME", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        config = IdentitySettings(_env_file=None)

        assert config.log_level == "INFO"
        assert config.log_format == "json"
        assert config.service_name == "student-identity"
        assert config.environment == "development"
        assert config.is_production() is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "TEXT")
        monkeypatch.setenv("ENVIRONMENT", "Production")

        config = IdentitySettings(_env_file=None)

        assert config.log_level == "DEBUG"
        assert config.log_format == "text"
        assert config.environment == "production"
        assert config.is_production() is True

    @pytest.mark.parametrize(
        "field,value",
        [
            ("log_level", "verbose"),
            ("log_format", "xml"),
            ("environment", "qa"),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError, match=field):
            IdentitySettings(_env_file=None, **{field: value})

    def test_settings_are_cached(self, monkeypatch):
        monkeypatch.setenv("SERVICE_NAME", "identity-a")
        get_settings.cache_clear()
        first = settings()

        monkeypatch.setenv("SERVICE_NAME", "identity-b")
        assert settings() is first
        assert settings().service_name == "identity-a"

        get_settings.cache_clear()
        assert settings().service_name == "identity-b"
