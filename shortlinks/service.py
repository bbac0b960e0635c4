"""Business logic service for short links."""

import logging
from typing import Any, Dict, Optional

from .slug import SlugGenerator
from .models import ShortLink
from .storage.base import MappingStore
from .common.validators import normalize_url, validate_url
from .common.url_builder import build_short_url
from .exceptions import InvalidInputError, SlugAllocationExhausted


DEFAULT_MAX_ATTEMPTS = 10


class ShortLinkService:
    """Service layer for creating and resolving short links.

    One instance is built at startup around the process-wide store and
    shared by every request handler.
    """

    def __init__(
        self,
        store: MappingStore,
        slug_generator: Optional[SlugGenerator] = None,
        base_url: Optional[str] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize short link service.

        Args:
            store: Mapping store instance
            slug_generator: Optional slug generator
            base_url: Public base URL or host for composed short URLs
            max_attempts: Maximum slug candidates tried per creation
            logger: Optional logger
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.store = store
        self.generator = slug_generator or SlugGenerator()
        self.base_url = base_url
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def create_short_link(self, url: Any) -> ShortLink:
        """Create a new short link.

        Args:
            url: The URL to shorten; a scheme-less value gets https://

        Returns:
            ShortLink with slug, short_url and the normalized original_url

        Raises:
            InvalidInputError: If the URL is missing or not an absolute http(s) URL
            SlugAllocationExhausted: If no free slug was found within max_attempts
            StorageUnavailable: If the store fails
        """
        if not url or not isinstance(url, str) or not url.strip():
            raise InvalidInputError("URL is required and must be a string")

        normalized = normalize_url(url.strip())
        is_valid, error = validate_url(normalized)
        if not is_valid:
            raise InvalidInputError(f"Invalid URL: {error}")

        slug = await self._allocate_slug(normalized)
        short_url = build_short_url(slug, self.base_url)

        self.logger.info(f"Created short link: {slug} -> {normalized}")

        return ShortLink(slug=slug, short_url=short_url, original_url=normalized)

    async def _allocate_slug(self, url: str) -> str:
        """Find a free slug and persist the mapping under it.

        Args:
            url: The normalized URL

        Returns:
            The slug the mapping was stored under

        Raises:
            SlugAllocationExhausted: If every attempt collided
        """
        for attempt in range(1, self.max_attempts + 1):
            slug = self.generator.generate()

            if await self.store.exists(slug):
                self.logger.debug(f"Slug collision on attempt {attempt}: {slug}")
                continue

            # Conditional write; a concurrent allocation may have taken the
            # slug since the exists() check.
            if await self.store.save_if_absent(slug, url):
                if attempt > 1:
                    self.logger.debug(f"Allocated slug after {attempt} attempts: {slug}")
                return slug

            self.logger.warning(f"Lost race for slug {slug} on attempt {attempt}")

        self.logger.error(f"Slug allocation exhausted after {self.max_attempts} attempts")
        raise SlugAllocationExhausted(
            f"Failed to generate unique slug after {self.max_attempts} attempts"
        )

    async def get_original_url(self, slug: Any) -> Optional[str]:
        """Get the original URL for a slug.

        Args:
            slug: The slug to lookup

        Returns:
            Original URL or None if not found
        """
        if not slug or not isinstance(slug, str):
            return None

        original_url = await self.store.get(slug.strip())

        if original_url is None:
            self.logger.debug(f"Slug not found: {slug}")
        return original_url

    async def slug_exists(self, slug: Any) -> bool:
        """Check if a slug exists.

        Args:
            slug: The slug to check

        Returns:
            True if exists
        """
        if not slug or not isinstance(slug, str):
            return False

        return await self.store.exists(slug.strip())

    async def health_check(self) -> Dict[str, Any]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        storage_healthy = await self.store.health_check()

        return {
            "storage": storage_healthy,
            "backend": self.store.name,
            "overall": storage_healthy,
        }

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
