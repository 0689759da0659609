"""Cache port for advisory, time-boxed values."""

from abc import abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

from ficarchive.domain.shared.port import Port

T = TypeVar("T")


class Cache(Port, Protocol):
    """Key-value cache with read-through ``fetch``."""

    @abstractmethod
    async def fetch(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
        *,
        expires_in: float | None = None,
        race_condition_ttl: float = 0,
    ) -> T:
        """Return the cached value for key, computing and storing it on a miss.

        Args:
            key: Cache key.
            compute: Coroutine factory producing the fresh value.
            expires_in: Seconds until the entry expires (None = never).
            race_condition_ttl: Seconds an expired entry is still served to
                other callers while one caller recomputes it.
        """
        ...

    @abstractmethod
    async def read(self, key: str) -> Any | None:
        """Return the live value for key, or None."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Drop key. Returns True if it was present."""
        ...
