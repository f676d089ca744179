"""
Configuration settings for the Card Vote API
Loads environment variables and provides application settings
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # API Configuration
    environment: str = Field(default="production")
    port: int = Field(default=3000)

    # Logging
    log_level: str = Field(default="INFO")

    # Banlist source
    banlist_url: str = Field(default="https://mtgjson.com/api/v5/AllPrintings.json")
    banlist_refresh_on_startup: bool = Field(default=True)

    # Retry policy for the banlist fetch (network errors, timeouts and 5xx only)
    banlist_fetch_retries: int = Field(default=2, ge=0)
    banlist_backoff_base_s: float = Field(default=0.5, ge=0)
    banlist_backoff_max_s: float = Field(default=8.0, ge=0)

    # Timeout Configuration for outbound requests
    external_api_timeout: float = Field(default=25)
    external_api_connect_timeout: float = Field(default=8)
    external_api_write_timeout: float = Field(default=8)

    # CORS Configuration
    allowed_origins: list = Field(default=["*"])


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()


# Global settings instance
settings = get_settings()
