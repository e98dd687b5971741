"""Backends de stockage du store de credentials."""

from crawl_auth.auth.backends.memory import MemoryBackend
from crawl_auth.auth.backends.redis import RedisBackend

__all__ = [
    "MemoryBackend",
    "RedisBackend",
]
