"""Data models for the short link service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ShortLink:
    """Result of a successful short link creation."""

    slug: str
    short_url: str
    original_url: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "slug": self.slug,
            "short_url": self.short_url,
            "original_url": self.original_url,
        }
