"""DI provider for admin-managed site state."""

from dishka import provide

from ficarchive.config import Config
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.admin.port.repository import AdminSettingsRepository, BannerRepository
from ficarchive.domain.admin.service.banner import BannerService
from ficarchive.domain.admin.service.settings import AdminSettingsService
from ficarchive.domain.shared.port.cache import Cache
from ficarchive.util.di.base import Provider
from ficarchive.util.di.scope import Scope


class AdminProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_settings_service(
        self, config: Config, repo: AdminSettingsRepository
    ) -> AdminSettingsService:
        return AdminSettingsService(
            _repo=repo,
            _cache_config=config.cache,
            _environment=config.server.environment,
        )

    @provide(scope=Scope.UOW)
    async def get_settings(self, service: AdminSettingsService) -> AdminSettings:
        """Settings snapshot read once per request."""
        return await service.current()

    @provide(scope=Scope.UOW)
    def get_banner_service(
        self, config: Config, repo: BannerRepository, cache: Cache
    ) -> BannerService:
        return BannerService(_repo=repo, _cache=cache, _environment=config.server.environment)
