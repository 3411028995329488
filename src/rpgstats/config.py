"""Configuration management for rpgstats using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="RPGSTATS_",
        extra="ignore",
    )

    # Content
    progression_dir: Path = Field(
        default=Path("./data/progression"),
        description="Directory (or single YAML file) holding progression curves",
    )

    # Character defaults
    default_starting_level: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Level used by characters that have no experience ledger",
    )
    use_modifiers: bool = Field(
        default=False, description="Whether new characters apply modifier providers"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
