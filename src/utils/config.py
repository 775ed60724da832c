"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Remote dashboard data (read-only spreadsheet API)
    DASHBOARD_API_BASE_URL: str = (
        "https://api.sheety.co/5bcc5e9b5a9271eb36b750afdfe11bae/bcSeoDashboard"
    )

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Default selection
    DEFAULT_COUNTRY: str = "PL"
    DEFAULT_VARIANT: str = "native"

    # Table page sizes
    KEYWORDS_PAGE_SIZE: int = 10
    COMPETITORS_PAGE_SIZE: int = 5

    # Cache
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = 300

    # Timeouts / retries
    API_TIMEOUT: float = 15.0
    API_MAX_RETRIES: int = 0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
