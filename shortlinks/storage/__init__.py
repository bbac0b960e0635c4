"""Storage layer for short link mappings."""

from .base import MappingStore
from .memory import InMemoryMappingStore
from .file import CacheState, FileMappingStore
from .factory import create_store

__all__ = [
    "MappingStore",
    "InMemoryMappingStore",
    "CacheState",
    "FileMappingStore",
    "create_store",
]
