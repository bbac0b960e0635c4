"""JSON file implementation of the mapping store."""

import asyncio
import enum
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .base import MappingStore
from ..exceptions import StorageUnavailable


DEFAULT_DATA_DIR = "data"
DEFAULT_DATA_FILE = "links.json"


class CacheState(enum.Enum):
    """Load state of the in-process copy of the data file."""

    UNLOADED = "unloaded"
    LOADED = "loaded"


class FileMappingStore(MappingStore):
    """Mappings kept in a single JSON document on local disk.

    The document is read into an in-process cache on first access
    (``UNLOADED -> LOADED`` through ``reload()``) and rewritten in full on every
    mutation. The rewrite goes through a temporary file and ``os.replace`` so a
    reader never sees a half-written document. Every write carries a
    generation number; a write that timed out is retired and can no longer
    replace the document, even though its worker thread keeps running.

    Writes are serialized inside one process by an asyncio lock. There is no
    locking across processes: two processes writing the same file can lose
    each other's updates, so run a single writer per data file.
    """

    name = "file"

    def __init__(
        self,
        data_dir: str = DEFAULT_DATA_DIR,
        filename: str = DEFAULT_DATA_FILE,
        operation_timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize file store.

        Args:
            data_dir: Directory holding the data file (created on first write)
            filename: Name of the JSON document inside data_dir
            operation_timeout_seconds: Upper bound for each disk operation
            logger: Optional logger instance
        """
        self.path = Path(data_dir) / filename
        self.operation_timeout_seconds = operation_timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

        self.state = CacheState.UNLOADED
        self._cache: Dict[str, str] = {}
        self._lock = asyncio.Lock()
        # Guards the generation check and os.replace against abandoned writer threads
        self._generation_lock = threading.Lock()
        self._generation = 0

    # ---- disk access (runs in worker threads) ----------------------------

    def _read_file(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise ValueError(f"{self.path} is not a slug -> URL object")
        return data

    def _write_file(self, data: Dict[str, str], generation: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=self.path.name + ".", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())

            # A write whose caller already gave up must not replace a newer document
            with self._generation_lock:
                if generation != self._generation:
                    self.logger.warning(f"Discarding abandoned write to {self.path}")
                    tmp_path.unlink()
                    return
                os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args),
                timeout=self.operation_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise StorageUnavailable(
                f"Timed out after {self.operation_timeout_seconds}s accessing {self.path}"
            ) from e
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            raise StorageUnavailable(f"Cannot access {self.path}: {e}") from e

    # ---- cache state -----------------------------------------------------

    async def _reload_locked(self) -> None:
        self._cache = await self._run(self._read_file)
        self.state = CacheState.LOADED
        self.logger.debug(f"Loaded {len(self._cache)} mappings from {self.path}")

    async def reload(self) -> None:
        """Re-read the data file into the cache (-> LOADED)."""
        async with self._lock:
            await self._reload_locked()

    async def _ensure_loaded(self) -> None:
        if self.state is CacheState.LOADED:
            return
        async with self._lock:
            if self.state is CacheState.UNLOADED:
                await self._reload_locked()

    def _next_generation(self) -> int:
        with self._generation_lock:
            self._generation += 1
            return self._generation

    async def _write_locked(self, slug: str, url: str) -> None:
        updated = dict(self._cache)
        updated[slug] = url
        generation = self._next_generation()
        try:
            await self._run(self._write_file, updated, generation)
        except StorageUnavailable:
            # The worker thread may still be running after a timeout. Retire its
            # generation so it cannot land, and re-read the file on next access
            # in case it already did.
            self._next_generation()
            self.state = CacheState.UNLOADED
            raise
        # Only publish to the cache once the document is on disk
        self._cache = updated

    # ---- contract ----------------------------------------------------------

    async def save(self, slug: str, url: str) -> None:
        async with self._lock:
            if self.state is CacheState.UNLOADED:
                await self._reload_locked()
            await self._write_locked(slug, url)

    async def save_if_absent(self, slug: str, url: str) -> bool:
        async with self._lock:
            if self.state is CacheState.UNLOADED:
                await self._reload_locked()
            if slug in self._cache:
                return False
            await self._write_locked(slug, url)
            return True

    async def get(self, slug: str) -> Optional[str]:
        await self._ensure_loaded()
        return self._cache.get(slug)

    async def exists(self, slug: str) -> bool:
        await self._ensure_loaded()
        return slug in self._cache

    async def health_check(self) -> bool:
        try:
            await self._ensure_loaded()
        except StorageUnavailable as e:
            self.logger.error(f"File store health check failed: {e}")
            return False
        return True
