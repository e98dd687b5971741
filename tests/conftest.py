"""Fixtures partagées des tests crawl_auth."""

import fnmatch
from typing import Any, Dict

import pytest

from crawl_auth.auth.backends.memory import MemoryBackend
from crawl_auth.auth.backends.redis import RedisBackend
from crawl_auth.auth.store import AuthStore


class InMemoryRedis:
    """Double de test du sous-ensemble de redis.Redis utilisé.

    Reproduit la sémantique des commandes ZADD, ZREVRANGEBYSCORE,
    ZCARD, HSET, HGETALL, SCAN et DEL sur des dictionnaires.
    raw=True simule un client sans decode_responses (bytes).
    """

    def __init__(self, raw: bool = False) -> None:
        self.raw = raw
        self.zsets: Dict[str, Dict[str, float]] = {}
        self.hashes: Dict[str, Dict[str, str]] = {}

    def _out(self, value: str) -> Any:
        return value.encode("utf-8") if self.raw else value

    def zadd(self, name: str, mapping: Dict[str, float]) -> int:
        zset = self.zsets.setdefault(name, {})
        added = len([m for m in mapping if m not in zset])
        zset.update({m: float(s) for m, s in mapping.items()})
        return added

    def zrevrangebyscore(self, name, max, min, withscores=False):
        zset = self.zsets.get(name, {})
        rows = sorted(
            ((score, member) for member, score in zset.items()
             if float(min) <= score <= float(max)),
            reverse=True,
        )
        if withscores:
            return [(self._out(m), s) for s, m in rows]
        return [self._out(m) for _, m in rows]

    def zcard(self, name: str) -> int:
        return len(self.zsets.get(name, {}))

    def hset(self, name: str, mapping: Dict[str, str]) -> int:
        self.hashes.setdefault(name, {}).update(mapping)
        return len(mapping)

    def hgetall(self, name: str) -> Dict[Any, Any]:
        return {
            self._out(k): self._out(v)
            for k, v in self.hashes.get(name, {}).items()
        }

    def scan_iter(self, match: str = "*", _type: str | None = None):
        candidates = []
        if _type in (None, "ZSET"):
            candidates.extend(self.zsets)
        if _type in (None, "HASH"):
            candidates.extend(self.hashes)
        for key in candidates:
            if fnmatch.fnmatchcase(key, match):
                yield self._out(key)

    def delete(self, *names: Any) -> int:
        deleted = 0
        for name in names:
            if isinstance(name, bytes):
                name = name.decode("utf-8")
            deleted += self.zsets.pop(name, None) is not None
            deleted += self.hashes.pop(name, None) is not None
        return deleted


@pytest.fixture
def fake_redis() -> InMemoryRedis:
    """Client Redis en mémoire (decode_responses=True)."""
    return InMemoryRedis()


@pytest.fixture
def redis_backend(fake_redis: InMemoryRedis) -> RedisBackend:
    """Backend Redis branche sur le double en mémoire."""
    return RedisBackend(fake_redis, namespace="test")


@pytest.fixture(params=["memory", "redis"])
def store(request: pytest.FixtureRequest) -> AuthStore:
    """AuthStore sur chacun des deux backends."""
    if request.param == "memory":
        return AuthStore(MemoryBackend())
    return AuthStore(RedisBackend(InMemoryRedis(), namespace="test"))
