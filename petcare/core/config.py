"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, with no scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (interactive docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: Explicit database URL; overrides the postgres_* values.
        auto_create_schema: Create missing tables at startup.
        rate_limit_enabled: Turn request rate limiting on or off.
        rate_limit_default: Default rate limit for all endpoints.
        default_country: Country used when an owner request omits it.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "PetCare"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "petcare"
    auto_create_schema: bool = True

    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"

    default_country: str = "France"

    def get_database_dsn(self) -> str:
        """Return the effective database DSN.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Build DSN from postgres_* values (useful for Docker Compose or local setups)
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
