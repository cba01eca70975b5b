"""
Application settings using Pydantic.

Loads configuration from environment variables with validation and type coercion.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionSettings(BaseSettings):
    """Text recognition and AI fallback configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="EXTRACTION_", extra="ignore")

    ocr_url: str = Field(
        default="http://localhost:8001/process",
        description="Endpoint of the text recognition service",
    )
    fallback_url: str = Field(
        default="",
        description="Endpoint of the AI fallback service",
    )
    fallback_api_key: str = Field(default="", description="Bearer token for the AI fallback")
    request_timeout: float = Field(
        default=30.0,
        description="Timeout for recognition and fallback requests (seconds)",
    )
    rate_limit_backoff: float = Field(
        default=3.0,
        ge=0.0,
        description="Wait before the single retry after a rate-limit response (seconds)",
    )
    inter_image_delay: float = Field(
        default=2.5,
        ge=0.0,
        description="Delay between successive images in one batch (seconds)",
    )
    cache_capacity: int = Field(
        default=256,
        ge=1,
        description="Maximum number of analysis results kept in memory",
    )

    def is_fallback_configured(self) -> bool:
        """Check if the AI fallback endpoint is configured."""
        return bool(self.fallback_url)


class ReportingSettings(BaseSettings):
    """Dashboard and leaderboard configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="REPORT_", extra="ignore")

    leaderboard_size: int = Field(
        default=3,
        ge=1,
        description="How many bookmakers and months the rankings return",
    )
    promotions_per_bookmaker: int = Field(
        default=3,
        ge=1,
        description="How many promotions are listed under each ranked bookmaker",
    )
    currency_symbol: str = Field(default="R$", description="Currency prefix for text reports")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data
    data_file: Path = Field(
        default=Path("data/export.json"),
        alias="DATA_FILE",
        description="JSON export with bets, gains and bookmakers",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_file: Path | None = Field(
        default=None,
        alias="LOG_FILE",
        description="Optional log file path",
    )
    log_json: bool = Field(
        default=False,
        alias="LOG_JSON",
        description="Render logs as JSON instead of console output",
    )

    # Sub-settings (loaded from same .env)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper


# Global settings instance - import this
settings = Settings()
