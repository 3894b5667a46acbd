"""
Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files
with validation and type conversion.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")
ENVIRONMENTS = ("development", "staging", "production")


def _one_of(field: str, value: str, choices: tuple) -> str:
    if value not in choices:
        raise ValueError(f"{field} must be one of: {', '.join(choices)}")
    return value


class IdentitySettings(BaseSettings):
    """
    Identity service settings loaded from environment variables and .env files.

    Settings are loaded in this order of precedence:
    1. Environment variables
    2. .env file in current directory
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(
        default="json",
        description="Log output format (json, text)"
    )

    # Service-specific Configuration
    service_name: str = Field(
        default="student-identity",
        description="Service name for logging and monitoring"
    )

    environment: str = Field(
        default="development",
        description="Environment name (development, staging, production)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        return _one_of("log_level", v.upper(), LOG_LEVELS)

    @field_validator("log_format", "environment")
    @classmethod
    def validate_choice(cls, v, info):
        """Log format and environment are lowercase names from a fixed set."""
        choices = LOG_FORMATS if info.field_name == "log_format" else ENVIRONMENTS
        return _one_of(info.field_name, v.lower(), choices)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> IdentitySettings:
    """
    Get cached settings instance.

    Settings are loaded only once per process; call
    ``get_settings.cache_clear()`` to reload them.

    Returns:
        IdentitySettings instance with loaded configuration
    """
    return IdentitySettings()


# Convenience function to get settings
def settings() -> IdentitySettings:
    """Get application settings."""
    return get_settings()
