"""Abstract base class for mapping store implementations."""

from abc import ABC, abstractmethod
from typing import Optional


class MappingStore(ABC):
    """Key-value persistence for slug -> URL mappings.

    Every backend implements the same three operations (save, get, exists).
    ``save_if_absent`` is the conditional write used by slug allocation; the
    default here is a plain exists-then-save and is NOT atomic. Backends whose
    medium offers a set-if-absent primitive override it.
    """

    name = "base"

    @abstractmethod
    async def save(self, slug: str, url: str) -> None:
        """Associate a slug with a URL.

        Args:
            slug: The slug to store under
            url: The normalized target URL

        Raises:
            StorageUnavailable: If the backend cannot persist the mapping
        """
        pass

    @abstractmethod
    async def get(self, slug: str) -> Optional[str]:
        """Get the URL stored for a slug.

        Args:
            slug: The slug to lookup

        Returns:
            The URL if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, slug: str) -> bool:
        """Check if a mapping for the slug is currently present.

        Args:
            slug: The slug to check

        Returns:
            True if exists, False otherwise
        """
        pass

    async def save_if_absent(self, slug: str, url: str) -> bool:
        """Store the mapping only if the slug is free.

        Args:
            slug: The slug to store under
            url: The normalized target URL

        Returns:
            True if stored, False if the slug was already taken
        """
        if await self.exists(slug):
            return False
        await self.save(slug, url)
        return True

    async def health_check(self) -> bool:
        """Check if the backend is usable.

        Returns:
            True if healthy, False otherwise
        """
        return True

    async def close(self) -> None:
        """Release backend resources."""
        pass
