"""Core business logic for the short link service."""

from .slug import SlugGenerator
from .service import ShortLinkService
from .models import ShortLink
from .exceptions import (
    ShortLinkError,
    InvalidInputError,
    SlugAllocationExhausted,
    StorageUnavailable,
)

__all__ = [
    "SlugGenerator",
    "ShortLinkService",
    "ShortLink",
    "ShortLinkError",
    "InvalidInputError",
    "SlugAllocationExhausted",
    "StorageUnavailable",
]
