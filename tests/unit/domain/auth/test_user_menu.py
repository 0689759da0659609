"""Tests for cached user menu counts."""

import pytest

from ficarchive.config import CacheConfig
from ficarchive.domain.auth.model import User, UserId
from ficarchive.domain.auth.port.user_stats import UserMenuCounts
from ficarchive.domain.auth.service.user_menu import UserMenuService, menu_cache_key
from ficarchive.infrastructure.cache.memory import InMemoryCache
from ficarchive.infrastructure.persistence.memory import InMemoryUserStatsReader


class _CountingStats(InMemoryUserStatsReader):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    async def menu_counts(self, user_id: UserId) -> UserMenuCounts:
        self.calls += 1
        return await super().menu_counts(user_id)


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _make_service(stats, clock=None) -> UserMenuService:
    cache = InMemoryCache(clock=clock) if clock else InMemoryCache()
    return UserMenuService(_stats=stats, _cache=cache, _config=CacheConfig())


class TestUserMenuService:
    @pytest.mark.asyncio
    async def test_counts_are_cached(self):
        stats = _CountingStats()
        user = User(id=UserId(3), login="ann")
        stats.record(user.id, UserMenuCounts(bookmarks=4))
        service = _make_service(stats)

        first = await service.counts_for(user)
        second = await service.counts_for(user)

        assert first == second == UserMenuCounts(bookmarks=4)
        assert stats.calls == 1

    @pytest.mark.asyncio
    async def test_counts_recomputed_after_two_hours(self):
        stats = _CountingStats()
        clock = _FakeClock()
        service = _make_service(stats, clock)
        user = User(id=UserId(3), login="ann")

        await service.counts_for(user)
        clock.now += 2 * 60 * 60 + 60
        await service.counts_for(user)

        assert stats.calls == 2

    @pytest.mark.asyncio
    async def test_expire_forgets_counts(self):
        stats = _CountingStats()
        service = _make_service(stats)
        user = User(id=UserId(3), login="ann")

        await service.counts_for(user)
        await service.expire(user)
        await service.counts_for(user)

        assert stats.calls == 2

    def test_cache_key_per_user(self):
        assert menu_cache_key(User(id=UserId(3), login="ann")) == "user_menu_counts_3"
