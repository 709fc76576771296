"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./rootly.db",
        description="SQLAlchemy URL of the local plant database"
    )
    seed_species_on_startup: bool = Field(
        default=True,
        description="Insert the built-in species catalog on startup if missing"
    )

    # Retry Configuration
    db_retry_attempts: int = Field(
        default=3,
        description="Maximum number of attempts for a database operation"
    )
    db_retry_min_wait: float = Field(
        default=0.1,
        description="Minimum wait time in seconds between retries"
    )
    db_retry_max_wait: float = Field(
        default=2.0,
        description="Maximum wait time in seconds between retries"
    )

    # Care Scheduling
    schedule_dead_plants: bool = Field(
        default=False,
        description="Whether plants marked as dead still report next due dates"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Whether per-client rate limiting is applied"
    )
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Rootly Plant Care Service",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
