"""Tests for service layer."""

import re
import asyncio

import pytest
from shortlinks.service import ShortLinkService
from shortlinks.slug import SLUG_ALPHABET
from shortlinks.storage.memory import InMemoryMappingStore
from shortlinks.exceptions import (
    InvalidInputError,
    SlugAllocationExhausted,
    StorageUnavailable,
)
from conftest import ScriptedSlugGenerator


SLUG_PATTERN = re.compile(rf"^https://short\.ly/s/[{SLUG_ALPHABET}]{{7}}$")


class RacingStore(InMemoryMappingStore):
    """Store where another writer grabs the slug between exists() and the write."""

    def __init__(self, stolen: str):
        super().__init__()
        self.stolen = stolen

    async def save_if_absent(self, slug, url):
        if slug == self.stolen and slug not in self._mappings:
            self._mappings[slug] = "https://other-writer.example.com"
            return False
        return await super().save_if_absent(slug, url)


class BrokenStore(InMemoryMappingStore):
    """Store whose backend is down."""

    async def exists(self, slug):
        raise StorageUnavailable("backend down")

    async def get(self, slug):
        raise StorageUnavailable("backend down")


class TestShortLinkService:
    """Test short link service."""

    @pytest.mark.asyncio
    async def test_create_short_link(self, service, sample_urls):
        """Test creating short link."""
        link = await service.create_short_link(sample_urls[0])

        assert len(link.slug) == 7
        assert set(link.slug) <= set(SLUG_ALPHABET)
        assert link.original_url == sample_urls[0]
        assert link.short_url == f"https://short.ly/s/{link.slug}"
        assert SLUG_PATTERN.match(link.short_url)
        assert link.to_dict() == {
            "slug": link.slug,
            "short_url": link.short_url,
            "original_url": sample_urls[0],
        }

    @pytest.mark.asyncio
    async def test_round_trip(self, service, sample_urls):
        """Every created link resolves to its normalized URL."""
        for url in sample_urls:
            link = await service.create_short_link(url)
            assert await service.get_original_url(link.slug) == url

    @pytest.mark.asyncio
    async def test_scheme_less_url_normalized(self, service, memory_store):
        """www.example.com is stored as https://www.example.com."""
        link = await service.create_short_link("www.example.com")

        assert link.original_url == "https://www.example.com"
        assert await memory_store.get(link.slug) == "https://www.example.com"
        assert SLUG_PATTERN.match(link.short_url)

    @pytest.mark.asyncio
    async def test_whitespace_trimmed(self, service):
        """Surrounding whitespace is ignored."""
        link = await service.create_short_link("  http://example.com/a  ")

        assert link.original_url == "http://example.com/a"

    @pytest.mark.asyncio
    async def test_same_url_gets_distinct_slugs(self, service, sample_urls):
        """No dedup: the same URL may be shortened many times."""
        first = await service.create_short_link(sample_urls[0])
        second = await service.create_short_link(sample_urls[0])

        assert first.slug != second.slug
        assert await service.get_original_url(first.slug) == sample_urls[0]
        assert await service.get_original_url(second.slug) == sample_urls[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "bad_url",
        ["not-a-url", "ftp://example.com", "", "javascript:alert(1)", "   ", None, 123, ["https://example.com"]],
    )
    async def test_invalid_url(self, service, memory_store, bad_url):
        """Test invalid input is rejected and nothing is stored."""
        with pytest.raises(InvalidInputError):
            await service.create_short_link(bad_url)

        assert len(memory_store) == 0

    @pytest.mark.asyncio
    async def test_invalid_input_is_value_error(self, service):
        """InvalidInputError can be handled as a ValueError."""
        with pytest.raises(ValueError, match="Invalid URL"):
            await service.create_short_link("not-a-url")

    @pytest.mark.asyncio
    async def test_collision_retry(self, memory_store, logger):
        """Colliding slugs are skipped until a free one comes up."""
        await memory_store.save("Taken22", "https://existing.example.com")
        generator = ScriptedSlugGenerator(["Taken22"] * 4 + ["Fresh33"])
        service = ShortLinkService(store=memory_store, slug_generator=generator, logger=logger)

        link = await service.create_short_link("https://example.com/new")

        assert link.slug == "Fresh33"
        assert generator.calls == 5
        assert await memory_store.get("Taken22") == "https://existing.example.com"
        assert await memory_store.get("Fresh33") == "https://example.com/new"

    @pytest.mark.asyncio
    async def test_collision_on_last_attempt(self, memory_store, logger):
        """A free slug on the final allowed attempt still succeeds."""
        await memory_store.save("Taken22", "https://existing.example.com")
        generator = ScriptedSlugGenerator(["Taken22"] * 9 + ["Fresh33"])
        service = ShortLinkService(store=memory_store, slug_generator=generator, max_attempts=10, logger=logger)

        link = await service.create_short_link("https://example.com/new")

        assert link.slug == "Fresh33"

    @pytest.mark.asyncio
    async def test_allocation_exhausted(self, memory_store, logger):
        """Colliding on every attempt fails with SlugAllocationExhausted."""
        await memory_store.save("Taken22", "https://existing.example.com")
        generator = ScriptedSlugGenerator(["Taken22"])
        service = ShortLinkService(store=memory_store, slug_generator=generator, max_attempts=10, logger=logger)

        with pytest.raises(SlugAllocationExhausted):
            await service.create_short_link("https://example.com/new")

        assert generator.calls == 10
        assert await memory_store.get("Taken22") == "https://existing.example.com"
        assert len(memory_store) == 1

    @pytest.mark.asyncio
    async def test_lost_race_is_retried(self, logger):
        """A slug taken between exists() and the write is not overwritten."""
        store = RacingStore(stolen="Racy222")
        generator = ScriptedSlugGenerator(["Racy222", "Fresh33"])
        service = ShortLinkService(store=store, slug_generator=generator, logger=logger)

        link = await service.create_short_link("https://example.com/mine")

        assert link.slug == "Fresh33"
        assert await store.get("Racy222") == "https://other-writer.example.com"

    @pytest.mark.asyncio
    async def test_storage_errors_propagate(self, logger):
        """Storage failures reach the caller unchanged."""
        service = ShortLinkService(store=BrokenStore(), logger=logger)

        with pytest.raises(StorageUnavailable):
            await service.create_short_link("https://example.com")

        with pytest.raises(StorageUnavailable):
            await service.get_original_url("abcdefg")

    @pytest.mark.asyncio
    async def test_get_nonexistent_url(self, service):
        """Unknown slugs resolve to None."""
        assert await service.get_original_url("nonexistent") is None

    @pytest.mark.asyncio
    async def test_get_original_url_bad_input(self, service):
        """Empty or non-string slugs resolve to None."""
        assert await service.get_original_url("") is None
        assert await service.get_original_url(None) is None
        assert await service.get_original_url(42) is None

    @pytest.mark.asyncio
    async def test_get_original_url_trims(self, service, sample_urls):
        """Slugs are trimmed before lookup."""
        link = await service.create_short_link(sample_urls[1])

        assert await service.get_original_url(f" {link.slug} ") == sample_urls[1]

    @pytest.mark.asyncio
    async def test_slug_exists(self, service, sample_urls):
        """Test slug existence check."""
        link = await service.create_short_link(sample_urls[0])

        assert await service.slug_exists(link.slug)
        assert await service.slug_exists(link.slug)
        assert not await service.slug_exists("nonexistent")
        assert not await service.slug_exists("")
        assert not await service.slug_exists(None)

    @pytest.mark.asyncio
    async def test_concurrent_creation_unique(self, service):
        """Concurrent creations share one store without clashing."""
        urls = [f"https://example.com/page_{i}" for i in range(100)]

        links = await asyncio.gather(*(service.create_short_link(u) for u in urls))

        assert len({link.slug for link in links}) == 100
        for link, url in zip(links, urls):
            assert await service.get_original_url(link.slug) == url

    @pytest.mark.asyncio
    async def test_default_base_url(self, memory_store):
        """Without a configured host the local default is used."""
        service = ShortLinkService(store=memory_store)

        link = await service.create_short_link("example.com")

        assert link.short_url == f"http://localhost:3000/s/{link.slug}"

    @pytest.mark.asyncio
    async def test_health_check(self, service):
        """Test health check."""
        health = await service.health_check()

        assert health == {"storage": True, "backend": "memory", "overall": True}

    def test_max_attempts_must_be_positive(self, memory_store):
        """Zero attempts is a configuration error."""
        with pytest.raises(ValueError):
            ShortLinkService(store=memory_store, max_attempts=0)
