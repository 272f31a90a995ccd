"""
Configuration Management Module

Configures application parameters via environment variables or .env file.
Supports Redis (default) and an in-process memory store.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "KV Gateway"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # KV Store Config
    # KV store backend: "redis" uses Redis, "memory" keeps data in process (development only)
    KV_STORE_TYPE: Literal["redis", "memory"] = "redis"
    # Redis connection URL (only used when KV_STORE_TYPE is "redis")
    REDIS_URL: str = "redis://localhost:6379/0"
    # Upper bound of pooled Redis connections shared by all requests
    REDIS_MAX_CONNECTIONS: int = 50
    # Socket read/write timeout (seconds)
    REDIS_SOCKET_TIMEOUT: float = 5.0

    # Key Policy Config
    # Time to live applied to every write (seconds)
    KV_TTL_SECONDS: int = 3600
    # SCAN page size hint and match pattern used by the full enumeration
    KV_SCAN_PAGE_SIZE: int = 10
    KV_SCAN_PATTERN: str = "*"
    # Max concurrent value reads during the full enumeration
    KV_FETCH_CONCURRENCY: int = 10

    # Timeout Config
    # Bound on a single store round trip (seconds, 0 disables)
    KV_OPERATION_TIMEOUT_SECONDS: float = 5.0
    # Bound on a whole full enumeration (seconds, 0 disables)
    KV_FETCH_ALL_TIMEOUT_SECONDS: float = 30.0

    # CORS Config
    # Comma-separated list of allowed origins for CORS
    # Example: "http://localhost:3000,https://example.com"
    # Default: empty list (no CORS allowed in production)
    ALLOWED_ORIGINS: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application configuration (Singleton)

    Uses lru_cache to ensure configuration is loaded only once.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
