"""Mapping store selection.

The backend is chosen once at startup from configuration:

- ``storage_backend`` set explicitly ("memory", "file" or "redis") wins;
- otherwise a configured ``redis_url`` selects Redis;
- otherwise the volatile in-memory store is used.

The Redis backend is imported only when selected.
"""

import logging
from typing import Optional

from .base import MappingStore
from .file import FileMappingStore
from .memory import InMemoryMappingStore


BACKENDS = ("memory", "file", "redis")


def resolve_backend_name(config) -> str:
    """Decide which backend the configuration asks for."""
    explicit = (getattr(config, "storage_backend", None) or "").strip().lower()
    if explicit:
        if explicit not in BACKENDS:
            raise ValueError(f"Unknown storage backend: {explicit!r} (expected one of {', '.join(BACKENDS)})")
        return explicit

    if getattr(config, "redis_url", None):
        return "redis"
    return "memory"


def create_store(config, logger: Optional[logging.Logger] = None) -> MappingStore:
    """Build the mapping store for this process.

    Args:
        config: Configuration instance
        logger: Optional logger handed to the backend

    Returns:
        MappingStore instance, shared for the lifetime of the process
    """
    logger = logger or logging.getLogger(__name__)
    backend = resolve_backend_name(config)

    if backend == "redis":
        if not config.redis_url:
            raise ValueError("REDIS_URL is required for the redis storage backend")

        from .redis_store import RedisMappingStore

        store: MappingStore = RedisMappingStore(
            redis_url=config.redis_url,
            key_prefix=config.redis_key_prefix,
            ttl_seconds=config.redis_ttl_seconds,
            connect_timeout_seconds=config.redis_connect_timeout_seconds,
            operation_timeout_seconds=config.operation_timeout_seconds,
            logger=logger,
        )
    elif backend == "file":
        store = FileMappingStore(
            data_dir=config.data_dir,
            filename=config.data_file,
            operation_timeout_seconds=config.operation_timeout_seconds,
            logger=logger,
        )
    else:
        store = InMemoryMappingStore()
        logger.warning("No persistent storage configured; short links will not survive a restart")

    logger.info(f"Using {store.name} storage backend")
    return store
