"""User menu counts, cached per user."""

import logging

from ficarchive.config import CacheConfig
from ficarchive.domain.auth.model.identity import User
from ficarchive.domain.auth.port.user_stats import UserMenuCounts, UserStatsReader
from ficarchive.domain.shared.port.cache import Cache
from ficarchive.domain.shared.service import Service

logger = logging.getLogger(__name__)


def menu_cache_key(user: User) -> str:
    return f"user_menu_counts_{user.id}"


class UserMenuService(Service):
    """Counts are advisory: a few hours stale is fine, recomputing on every page is not."""

    _stats: UserStatsReader
    _cache: Cache
    _config: CacheConfig

    async def counts_for(self, user: User) -> UserMenuCounts:
        async def compute() -> UserMenuCounts:
            logger.debug("Computing menu counts for user %s", user.id)
            return await self._stats.menu_counts(user.id)

        return await self._cache.fetch(
            menu_cache_key(user),
            compute,
            expires_in=self._config.user_menu_expires_in,
            race_condition_ttl=self._config.race_condition_ttl,
        )

    async def expire(self, user: User) -> None:
        await self._cache.delete(menu_cache_key(user))
