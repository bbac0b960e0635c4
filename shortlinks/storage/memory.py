"""Volatile in-process mapping store."""

from typing import Dict, Optional

from .base import MappingStore


class InMemoryMappingStore(MappingStore):
    """Mappings held in a dict for the lifetime of the process.

    Used when no persistent medium is configured. Nothing survives a restart.
    """

    name = "memory"

    def __init__(self):
        self._mappings: Dict[str, str] = {}

    async def save(self, slug: str, url: str) -> None:
        self._mappings[slug] = url

    async def get(self, slug: str) -> Optional[str]:
        return self._mappings.get(slug)

    async def exists(self, slug: str) -> bool:
        return slug in self._mappings

    async def save_if_absent(self, slug: str, url: str) -> bool:
        # No await between the check and the write, so this is atomic
        # with respect to other tasks on the same event loop.
        if slug in self._mappings:
            return False
        self._mappings[slug] = url
        return True

    def __len__(self) -> int:
        return len(self._mappings)
