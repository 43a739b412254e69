"""
Configuration Management Module

Configures library parameters via environment variables or .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library Configuration Class

    All configuration items can be overridden by environment variables named
    after the field with the HTTPSTAT_ prefix (e.g. HTTPSTAT_HTTP_TIMEOUT).
    """

    DEBUG: bool = False

    # HTTP Client Config
    # Request timeout (seconds)
    HTTP_TIMEOUT: float = 30.0
    # Follow redirects; every hop adds a trace record when it uses a connection
    FOLLOW_REDIRECTS: bool = True

    # Tracing Config
    # Log every connection lifecycle event at DEBUG level
    LOG_TRACE_EVENTS: bool = False

    model_config = SettingsConfigDict(
        env_prefix="HTTPSTAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get library configuration (Singleton)

    Returns:
        Settings: Configuration instance
    """
    return Settings()
