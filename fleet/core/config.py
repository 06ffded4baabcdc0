"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here. No scattered magic strings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        db_echo: Log every SQL statement issued by SQLAlchemy.
        create_schema: Create the vessel tables on startup.
        default_page_size: Page size when the client sends none.
        max_page_size: Largest page size a client may request.
        notification_webhook_url: Webhook for "vessel created" notifications.
            Notifications are only logged when unset.
        notification_timeout: HTTP timeout for webhook calls, in seconds.
        notification_workers: Number of background delivery threads.
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_write: Rate limit for endpoints creating resources.
        rate_limit_enabled: Switch rate limiting on or off.

    The database is addressed by ``database_url`` if set, otherwise by a
    PostgreSQL DSN built from the postgres_* values.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Fleet"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database settings
    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "fleet"
    db_echo: bool = False
    create_schema: bool = False

    # Pagination
    default_page_size: int = 5
    max_page_size: int = 100

    # Notifications
    notification_webhook_url: Optional[str] = None
    notification_timeout: float = 10.0
    notification_workers: int = 1

    rate_limit_default: str = "60/minute"
    rate_limit_write: str = "30/minute"
    rate_limit_enabled: bool = True

    def get_database_dsn(self) -> str:
        """Return the effective SQLAlchemy database URL.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Build a PostgreSQL DSN from postgres_* values (useful for Docker Compose or local setups)
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
