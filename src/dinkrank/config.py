"""
Configuration management for dinkrank.

Uses Pydantic Settings to load configuration from environment variables
with sensible defaults for development. Every setting can be overridden
with a DINKRANK_-prefixed environment variable or a .env file.

Usage:
    from dinkrank.config import settings
    print(settings.doubles_url)
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can be set directly or via a .env file
    in the project root directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DINKRANK_",
        case_sensitive=False,
    )

    # ==========================================================================
    # Rankings Source Configuration
    # ==========================================================================

    # r.jina.ai renders the pages as markdown, which the primary table
    # strategy understands
    doubles_url: str = Field(
        default="https://r.jina.ai/http://www.pickleball.ky/rankings/",
        description="URL of the published doubles rankings page",
    )
    singles_url: str = Field(
        default="https://r.jina.ai/http://www.pickleball.ky/singles-rankings/",
        description="URL of the published singles rankings page",
    )
    fetch_timeout: float = Field(
        default=30.0,
        description="Timeout for fetching a rankings page (seconds)",
    )
    fetch_max_attempts: int = Field(
        default=3,
        description="Total attempts for a rankings page fetch, the first one included",
    )
    fetch_retry_delay: float = Field(
        default=1.0,
        description="Initial delay between fetch retries (doubles each attempt)",
    )

    # ==========================================================================
    # Name Matching Configuration
    # ==========================================================================

    # Token-set scores are 0-100. See players/identity.py for the tier order.
    fuzzy_high_threshold: int = Field(
        default=85,
        description="Accept a fuzzy match at or above this score before the last-name tier",
    )
    fuzzy_low_threshold: int = Field(
        default=75,
        description="Accept a fuzzy match at or above this score as a last resort",
    )
    last_name_fallback: bool = Field(
        default=True,
        description="Match unknown first names to the top-rated player sharing the last name",
    )

    # ==========================================================================
    # API Configuration
    # ==========================================================================

    api_host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to",
    )
    api_port: int = Field(
        default=8000,
        description="Port for the API server",
    )
    api_reload: bool = Field(
        default=False,
        description="Enable auto-reload for development",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("fuzzy_high_threshold", "fuzzy_low_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        """Scores are percentages."""
        if not 0 <= v <= 100:
            raise ValueError("fuzzy thresholds must be between 0 and 100")
        return v

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "Settings":
        if self.fuzzy_low_threshold > self.fuzzy_high_threshold:
            raise ValueError("fuzzy_low_threshold must not exceed fuzzy_high_threshold")
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once,
    which is important because loading from .env can be slow.
    """
    return Settings()


# Convenience alias for importing
settings = get_settings()
