"""Admin banner lookup, cached outside development."""

import logging

from ficarchive.domain.admin.model.banner import AdminBanner
from ficarchive.domain.admin.port.repository import BannerRepository
from ficarchive.domain.shared.port.cache import Cache
from ficarchive.domain.shared.service import Service

logger = logging.getLogger(__name__)

BANNER_CACHE_KEY = "admin_banner"
NO_BANNER = ""  # Cached in place of None so "no banner" is a hit too


class BannerService(Service):
    """Loads the active admin banner for the page header."""

    _repo: BannerRepository
    _cache: Cache
    _environment: str

    async def current(self) -> AdminBanner | None:
        if self._environment == "development":
            return await self._repo.latest_active()

        async def load() -> AdminBanner | str:
            banner = await self._repo.latest_active()
            return NO_BANNER if banner is None else banner

        cached = await self._cache.fetch(BANNER_CACHE_KEY, load)
        return None if cached == NO_BANNER else cached

    async def expire(self) -> None:
        """Forget the cached banner after an admin edits banners."""
        await self._cache.delete(BANNER_CACHE_KEY)
        logger.info("Admin banner cache expired")
