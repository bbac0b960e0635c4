"""Redis implementation of the mapping store."""

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar
from urllib.parse import urlparse

import redis.asyncio as redis
from redis.exceptions import RedisError

from .base import MappingStore
from ..exceptions import StorageUnavailable


ONE_YEAR_SECONDS = 365 * 24 * 60 * 60
DEFAULT_KEY_PREFIX = "shortlink:"
DEFAULT_CONNECT_TIMEOUT_SECONDS = 60

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_redis_errors(method: F) -> F:
    """Wrap Redis-interacting store methods so driver failures surface as StorageUnavailable.

    Example:
        >>> @handle_redis_errors
        ... async def get(self, slug):
        ...     return await (await self._get_client()).get(slug)
    """

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except (RedisError, asyncio.TimeoutError) as e:
            raise StorageUnavailable(f"Redis at {self.display_url} failed: {e}") from e

    return wrapper  # type: ignore[return-value]


class RedisMappingStore(MappingStore):
    """Mappings stored as plain string keys in Redis.

    Each slug lives under ``<key_prefix><slug>`` with an optional TTL so old
    mappings are reclaimed by Redis itself. ``save_if_absent`` uses
    ``SET ... NX`` which closes the exists/save race of slug allocation.
    """

    name = "redis"

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        ttl_seconds: Optional[int] = ONE_YEAR_SECONDS,
        connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS,
        operation_timeout_seconds: float = 10.0,
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Namespace prepended to every slug
            ttl_seconds: Expiry applied on save; None or 0 keeps keys forever
            connect_timeout_seconds: Timeout for establishing the connection
            operation_timeout_seconds: Socket timeout for each command
            client: Pre-built client (skips connection setup)
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds or None
        self.connect_timeout_seconds = connect_timeout_seconds
        self.operation_timeout_seconds = operation_timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

        self.client: Optional[redis.Redis] = client
        self._client_lock = asyncio.Lock()

    @property
    def display_url(self) -> str:
        """Connection URL without credentials, for log and error messages."""
        parsed = urlparse(self.redis_url)
        host = parsed.hostname or "localhost"
        port = parsed.port or 6379
        return f"{parsed.scheme or 'redis'}://{host}:{port}{parsed.path}"

    def key(self, slug: str) -> str:
        """Redis key for a slug."""
        return f"{self.key_prefix}{slug}"

    async def _get_client(self) -> redis.Redis:
        """Get or create the shared client, connecting on first use."""
        if self.client is not None:
            return self.client

        async with self._client_lock:
            if self.client is None:
                self.logger.info(f"Connecting to Redis at {self.display_url}")
                client = redis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_connect_timeout=self.connect_timeout_seconds,
                    socket_timeout=self.operation_timeout_seconds,
                )
                try:
                    await client.ping()
                except BaseException:
                    await client.aclose()
                    raise
                self.client = client
                self.logger.info("Connected to Redis")

        return self.client

    @handle_redis_errors
    async def _get_client_checked(self) -> redis.Redis:
        return await self._get_client()

    @handle_redis_errors
    async def save(self, slug: str, url: str) -> None:
        client = await self._get_client()
        await client.set(self.key(slug), url, ex=self.ttl_seconds)

    @handle_redis_errors
    async def save_if_absent(self, slug: str, url: str) -> bool:
        client = await self._get_client()
        created = await client.set(self.key(slug), url, ex=self.ttl_seconds, nx=True)
        return bool(created)

    @handle_redis_errors
    async def get(self, slug: str) -> Optional[str]:
        client = await self._get_client()
        return await client.get(self.key(slug))

    @handle_redis_errors
    async def exists(self, slug: str) -> bool:
        client = await self._get_client()
        return await client.exists(self.key(slug)) > 0

    async def health_check(self) -> bool:
        try:
            client = await self._get_client_checked()
            await client.ping()
        except (StorageUnavailable, RedisError, asyncio.TimeoutError) as e:
            self.logger.error(f"Redis health check failed: {e}")
            return False
        return True

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
