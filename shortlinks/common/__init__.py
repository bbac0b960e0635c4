"""Common utilities for the short link service."""

from .validators import is_valid_url, normalize_url, validate_url
from .url_builder import build_short_url, DEFAULT_BASE_URL, SHORT_PATH_PREFIX
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "normalize_url",
    "validate_url",
    "build_short_url",
    "DEFAULT_BASE_URL",
    "SHORT_PATH_PREFIX",
    "setup_logging",
]
