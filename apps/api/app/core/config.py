"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "0.03.00"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Database (PostgreSQL in production; local SQLite file for dev)
    DATABASE_URL: str = "sqlite:///./crm.db"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Cal.com booking webhook
    CAL_WEBHOOK_SECRET: str = ""  # Signature check is skipped when empty
    CAL_WEBHOOK_MAX_PAYLOAD_BYTES: int = 100000  # 100KB limit

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Rate Limiting (requests per minute)
    RATE_LIMIT_WEBHOOK: int = 100  # Cal.com webhooks
    RATE_LIMIT_API: int = 60  # General API

    # Report rendering
    CURRENCY_SYMBOL: str = "$"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
