"""Main application settings and configuration management.

This module composes all the application settings from the different modules
(app, database, redis, auth) into a single, accessible `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object for use throughout the application.

Environment Support:
- Development: Uses .env
- Test: Uses .env.test, missing required variables are only logged
- Staging: Uses .env.staging
- Production: Uses .env.production
"""

import logging
import os
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .database import DatabaseSettings
from .redis import RedisSettings

logger = logging.getLogger(__name__)
logging.getLogger("passlib").setLevel(logging.ERROR)


class Settings(AppSettings, DatabaseSettings, RedisSettings, AuthSettings):
    """The main settings class that aggregates all application configurations.

    It inherits from all the specialized settings classes, providing a unified
    interface to all configuration parameters.

    Security Note:
        - Sensitive fields (JWT_SECRET_KEY, passwords) are ``SecretStr`` and are
          never logged or exposed.
    Usage:
        - Access settings via the singleton instance `settings` throughout the application.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    def __init__(self, **kwargs):
        """Initialize settings with environment-specific configuration."""
        super().__init__(**kwargs)

        if self.APP_ENV == "development":
            self.DEBUG = True
            logger.info("Debug mode enabled for development environment")

        logger.info(f"Application running in {self.APP_ENV} environment")

    @property
    def is_test(self) -> bool:
        return self.APP_ENV == "test"

    def validate_required_fields(self) -> None:
        """Validates that all required environment variables are set.

        Raises ValueError if any critical field is missing or empty, unless in test mode.

        Raises:
            ValueError: If required fields are missing and not in test mode.

        """
        required_fields = [
            "PROJECT_NAME",
            "DATABASE_URL",
            "REDIS_URL",
            "JWT_SECRET_KEY",
        ]

        missing_fields = []
        for field in required_fields:
            value = getattr(self, field, None)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if not value:
                missing_fields.append(field)

        if missing_fields:
            error_msg = f"Missing required environment variables: {', '.join(missing_fields)}"
            if self.is_test:
                logger.warning(f"Test mode: {error_msg}")
            else:
                logger.error(error_msg)
                raise ValueError(error_msg)
        else:
            logger.info("All required environment variables are set.")


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")

    env_files = {
        "development": ".env",
        "test": ".env.test",
        "staging": ".env.staging",
        "production": ".env.production",
    }

    env_file = env_files.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        return Settings(_env_file=env_file)
    if Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
        return Settings()

    logger.warning(f"No .env file found, using environment variables only (environment: {env})")
    return Settings()


# Create a singleton instance of the settings to be used across the application.
settings = create_settings()
settings.validate_required_fields()
