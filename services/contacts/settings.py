from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Contacts Service settings and configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Database configuration
    db_url_contacts: str = Field(
        default="sqlite:///./contacts.db",
        description="Database connection URL",
        validation_alias=AliasChoices("DB_URL_CONTACTS", "db_url_contacts"),
    )
    DB_CREATE_TABLES: bool = Field(
        default=True, description="Create missing tables on startup"
    )
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")

    # Service configuration
    PORT: int = Field(default=8007, description="Port to bind to")
    HOST: str = Field(default="0.0.0.0", description="Host to bind to")
    DEBUG: bool = Field(default=False, description="Debug mode")
    API_PREFIX: str = Field(default="/api", description="Base path for the API routes")

    # CORS configuration
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default=["*"], description="Origins allowed to call the API"
    )

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log format (json or text)")

    # Application info
    APP_NAME: str = Field(default="contacts-service", description="Application name")
    APP_VERSION: str = Field(default="0.1.0", description="Application version")
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment (development, staging, production)",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
