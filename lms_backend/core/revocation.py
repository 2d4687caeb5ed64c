"""Denylist of logged-out session tokens."""

import threading
import time
from functools import lru_cache
from typing import Dict

from loguru import logger


class RevocationCache:
    """Expiring key store consulted on every authenticated call."""

    def put(self, key: str, ttl_seconds: float) -> None:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def purge_expired(self) -> int:
        """Drop expired entries. Returns count removed."""
        return 0


class MemoryRevocationCache(RevocationCache):
    """In-process TTL map for single-process deployments."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._expiry: Dict[str, float] = {}
        self._lock = threading.Lock()

    def put(self, key: str, ttl_seconds: float) -> None:
        # a token already past its expiry needs no entry, the JWT check rejects it
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._expiry[key] = self._clock() + ttl_seconds

    def exists(self, key: str) -> bool:
        with self._lock:
            expires_at = self._expiry.get(key)
            if expires_at is None:
                return False
            if self._clock() >= expires_at:
                del self._expiry[key]
                return False
            return True

    def purge_expired(self) -> int:
        with self._lock:
            current = self._clock()
            expired = [k for k, exp in self._expiry.items() if current >= exp]
            for k in expired:
                del self._expiry[k]
        return len(expired)

    def __len__(self) -> int:
        return len(self._expiry)


@lru_cache(maxsize=1)
def get_revocation_cache() -> RevocationCache:
    logger.info("🚀 Creating in-memory revocation cache")
    return MemoryRevocationCache()
