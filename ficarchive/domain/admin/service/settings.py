"""Admin settings access."""

from ficarchive.config import CacheConfig
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.admin.port.repository import AdminSettingsRepository
from ficarchive.domain.shared.service import Service


class AdminSettingsService(Service):
    _repo: AdminSettingsRepository
    _cache_config: CacheConfig
    _environment: str

    async def current(self) -> AdminSettings:
        return await self._repo.current()

    async def use_caching(self) -> bool:
        """Page caching runs only in caching environments with the admin switch on."""
        if self._environment not in self._cache_config.caching_environments:
            return False
        settings = await self._repo.current()
        return settings.enable_test_caching

    async def set_tag_wrangling_off(self, off: bool) -> AdminSettings:
        settings = await self._repo.current()
        updated = AdminSettings(
            tag_wrangling_off=off,
            enable_test_caching=settings.enable_test_caching,
        )
        await self._repo.save(updated)
        return updated
