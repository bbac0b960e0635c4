"""Configuration management for the short link service."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    storage_backend: Optional[str] = Field(
        default=None,
        description="Force a backend: 'memory', 'file' or 'redis'. "
                    "Unset = redis when REDIS_URL is given, memory otherwise."
    )

    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL (e.g., redis://localhost:6379/0)"
    )

    redis_key_prefix: str = Field(
        default="shortlink:",
        description="Namespace prepended to every slug key in Redis"
    )

    redis_ttl_seconds: int = Field(
        default=365 * 24 * 60 * 60,
        ge=0,
        description="Expiry for Redis mappings in seconds (0 = never expire)"
    )

    redis_connect_timeout_seconds: float = Field(
        default=60,
        gt=0,
        description="Timeout for establishing the Redis connection"
    )

    operation_timeout_seconds: float = Field(
        default=10,
        gt=0,
        description="Upper bound for a single storage operation"
    )

    data_dir: str = Field(
        default="data",
        description="Directory for the file backend (created on demand)"
    )

    data_file: str = Field(
        default="links.json",
        description="JSON document name inside data_dir"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        description="Port to listen on"
    )

    # Short link settings
    public_host: Optional[str] = Field(
        default=None,
        description="Public base URL or host for short links (e.g., https://short.ly or short.ly)"
    )

    slug_length: int = Field(
        default=7,
        ge=1,
        description="Number of characters in generated slugs"
    )

    max_slug_attempts: int = Field(
        default=10,
        ge=1,
        description="Maximum slug candidates tried before giving up"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
