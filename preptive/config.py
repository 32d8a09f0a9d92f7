"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote store (Supabase / PostgREST)
    supabase_url: str = Field(default="", description="Project URL, e.g. https://xyz.supabase.co")
    supabase_anon_key: str = Field(default="", description="Public anon API key")
    supabase_timeout: float = Field(default=10.0, description="HTTP request timeout in seconds")
    posts_table: str = Field(default="posts", description="Table holding published posts")

    # Search
    search_page_size: int = Field(default=10, ge=1, description="Results per search page")
    site_url: str = Field(
        default="https://www.preptive.in", description="Public origin used in canonical URLs"
    )

    # Application Configuration
    app_title: str = Field(default="PrepTive", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
