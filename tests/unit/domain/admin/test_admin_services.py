"""Tests for admin banner and settings services."""

import pytest

from ficarchive.config import CacheConfig
from ficarchive.domain.admin.model.banner import AdminBanner, BannerType
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.admin.service.banner import BannerService
from ficarchive.domain.admin.service.settings import AdminSettingsService
from ficarchive.infrastructure.cache.memory import InMemoryCache
from ficarchive.infrastructure.persistence.memory import (
    InMemoryAdminSettingsRepository,
    InMemoryBannerRepository,
)


def _make_banner_service(environment: str = "production"):
    repo = InMemoryBannerRepository()
    return repo, BannerService(_repo=repo, _cache=InMemoryCache(), _environment=environment)


def _make_settings_service(
    settings: AdminSettings | None = None, environment: str = "production"
) -> AdminSettingsService:
    return AdminSettingsService(
        _repo=InMemoryAdminSettingsRepository(settings),
        _cache_config=CacheConfig(),
        _environment=environment,
    )


class TestBannerService:
    @pytest.mark.asyncio
    async def test_latest_active_banner(self):
        repo, service = _make_banner_service()
        await repo.save(AdminBanner(id=1, content="Old news"))
        await repo.save(AdminBanner(id=2, content="Maintenance", banner_type=BannerType.ALERT))
        await repo.save(AdminBanner(id=3, content="Draft", active=False))

        banner = await service.current()

        assert banner is not None
        assert banner.content == "Maintenance"

    @pytest.mark.asyncio
    async def test_no_banner_is_cached_until_expired(self):
        repo, service = _make_banner_service()

        assert await service.current() is None
        await repo.save(AdminBanner(id=1, content="New"))
        assert await service.current() is None

        await service.expire()
        banner = await service.current()

        assert banner is not None
        assert banner.content == "New"

    @pytest.mark.asyncio
    async def test_development_reads_through(self):
        repo, service = _make_banner_service(environment="development")

        assert await service.current() is None
        await repo.save(AdminBanner(id=1, content="New"))

        assert (await service.current()) == AdminBanner(id=1, content="New")


class TestAdminSettingsService:
    @pytest.mark.asyncio
    async def test_caching_requires_switch(self):
        assert not await _make_settings_service().use_caching()
        assert await _make_settings_service(AdminSettings(enable_test_caching=True)).use_caching()

    @pytest.mark.asyncio
    async def test_caching_off_outside_caching_environments(self):
        service = _make_settings_service(
            AdminSettings(enable_test_caching=True), environment="development"
        )

        assert not await service.use_caching()

    @pytest.mark.asyncio
    async def test_toggle_tag_wrangling(self):
        service = _make_settings_service(AdminSettings(enable_test_caching=True))

        updated = await service.set_tag_wrangling_off(True)

        assert updated == AdminSettings(tag_wrangling_off=True, enable_test_caching=True)
        assert (await service.current()).tag_wrangling_off
