"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator, Iterable, List

from shortlinks.service import ShortLinkService
from shortlinks.slug import SlugGenerator
from shortlinks.storage.memory import InMemoryMappingStore
from shortlinks.storage.file import FileMappingStore
from shortlinks.common.logging_config import setup_logging


class ScriptedSlugGenerator(SlugGenerator):
    """Slug generator that hands out a fixed sequence of slugs."""

    def __init__(self, slugs: Iterable[str], length: int = 7):
        super().__init__(length=length)
        self._slugs: List[str] = list(slugs)
        self.calls = 0

    def generate(self) -> str:
        slug = self._slugs[min(self.calls, len(self._slugs) - 1)]
        self.calls += 1
        return slug


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def memory_store() -> InMemoryMappingStore:
    """Create empty in-memory store."""
    return InMemoryMappingStore()


@pytest.fixture
async def file_store(tmp_path, logger) -> AsyncGenerator[FileMappingStore, None]:
    """Create file store rooted in a temporary data directory."""
    store = FileMappingStore(data_dir=str(tmp_path / "data"), logger=logger)

    yield store

    await store.close()


@pytest.fixture
def slug_generator():
    """Create slug generator."""
    return SlugGenerator(length=7)


@pytest.fixture
def service(memory_store, slug_generator, logger) -> ShortLinkService:
    """Create service instance."""
    return ShortLinkService(
        store=memory_store,
        slug_generator=slug_generator,
        base_url="https://short.ly",
        logger=logger,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456",
    ]
