"""Process-local cache adapter."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from ficarchive.domain.shared.port.cache import Cache

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Entry:
    value: Any
    expires_at: float | None  # Clock reading, None = never
    grace: float = 0  # How long past expiry the value may still be served stale

    def is_fresh(self, now: float) -> bool:
        return self.expires_at is None or now < self.expires_at

    def is_dead(self, now: float) -> bool:
        return self.expires_at is not None and now > self.expires_at + self.grace


@dataclass
class _KeyLock:
    lock: asyncio.Lock
    users: int = 0


class InMemoryCache(Cache):
    """In-memory cache with per-key locking and a race-condition window.

    When an entry has just expired (within ``race_condition_ttl``), the first
    caller extends it by that window and recomputes; concurrent callers keep
    getting the stale value instead of piling onto the same recomputation.

    Entries past their stale window are evicted on the next write or read of
    the cache, and a key's lock lives only while someone holds or awaits it.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, _Entry] = {}
        self._locks: dict[str, _KeyLock] = {}
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def lock_count(self) -> int:
        return len(self._locks)

    def _evict_dead(self, now: float) -> None:
        dead = [key for key, entry in self._entries.items() if entry.is_dead(now)]
        for key in dead:
            del self._entries[key]
        if dead:
            logger.debug("Evicted %d expired cache entries", len(dead))

    def _acquire(self, key: str) -> _KeyLock:
        key_lock = self._locks.get(key)
        if key_lock is None:
            key_lock = self._locks[key] = _KeyLock(asyncio.Lock())
        key_lock.users += 1
        return key_lock

    def _release(self, key: str, key_lock: _KeyLock) -> None:
        key_lock.users -= 1
        if key_lock.users == 0:
            del self._locks[key]

    async def fetch(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
        *,
        expires_in: float | None = None,
        race_condition_ttl: float = 0,
    ) -> T:
        now = self._clock()
        seen = self._entries.get(key)
        if seen is not None and seen.is_fresh(now):
            return seen.value

        if (
            seen is not None
            and race_condition_ttl > 0
            and seen.expires_at is not None
            and now - seen.expires_at <= race_condition_ttl
        ):
            seen.expires_at = now + race_condition_ttl

        key_lock = self._acquire(key)
        try:
            async with key_lock.lock:
                current = self._entries.get(key)
                # Someone else refreshed the key while we waited
                if (
                    current is not None
                    and current is not seen
                    and current.is_fresh(self._clock())
                ):
                    return current.value

                logger.debug("Cache miss: %s", key)
                value = await compute()
                now = self._clock()
                expires_at = None if expires_in is None else now + expires_in
                self._entries[key] = _Entry(
                    value=value, expires_at=expires_at, grace=race_condition_ttl
                )
                self._evict_dead(now)
                return value
        finally:
            self._release(key, key_lock)

    async def read(self, key: str) -> Any | None:
        now = self._clock()
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_dead(now):
            del self._entries[key]
            return None
        if not entry.is_fresh(now):
            return None
        return entry.value

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None
