"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, server port, client settings)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="PracticeDB",
        description="MongoDB database name"
    )
    USERS_COLLECTION: str = Field(
        default="users",
        description="Collection holding user records"
    )
    MONGODB_CONNECT_RETRIES: int = Field(
        default=3,
        ge=1,
        description="Connection attempts at startup before giving up"
    )
    MONGODB_FAIL_FAST: bool = Field(
        default=False,
        description="Abort startup when MongoDB is unreachable instead of serving 500s"
    )

    # Server
    HOST: str = Field(
        default="0.0.0.0",
        description="Bind address for the API server"
    )
    PORT: int = Field(
        default=5000,
        description="Port for the API server"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Client data layer
    API_BASE_URL: str = Field(
        default="http://localhost:5000",
        description="Base URL the client uses to reach the API"
    )
    CLIENT_MESSAGE_TIMEOUT_SECONDS: float = Field(
        default=3.0,
        ge=0,
        description="How long a success message stays visible on the client"
    )
    CLIENT_REQUEST_TIMEOUT: Optional[float] = Field(
        default=None,
        description="Client request timeout in seconds (None waits forever)"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if not settings.USERS_COLLECTION:
        errors.append("USERS_COLLECTION is required")

    if not 0 < settings.PORT < 65536:
        errors.append(f"PORT out of range: {settings.PORT}")

    if settings.is_production and "*" in settings.CORS_ORIGINS:
        errors.append("CORS_ORIGINS must list explicit origins in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
