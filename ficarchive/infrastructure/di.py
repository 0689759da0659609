"""DI provider for infrastructure adapters."""

import logging

from dishka import from_context, provide

from ficarchive.config import Config
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.admin.port.repository import AdminSettingsRepository, BannerRepository
from ficarchive.domain.auth.port.account import AccountRepository
from ficarchive.domain.auth.port.identity_resolver import IdentityResolver
from ficarchive.domain.auth.port.user_stats import UserStatsReader
from ficarchive.domain.faq.port.repository import QuestionRepository
from ficarchive.domain.shared.port.cache import Cache
from ficarchive.domain.shared.port.translator import Translator
from ficarchive.infrastructure.auth.session_identity import (
    AccountDirectory,
    SessionIdentityResolver,
)
from ficarchive.infrastructure.cache.memory import InMemoryCache
from ficarchive.infrastructure.i18n.yaml_translator import YamlTranslator
from ficarchive.infrastructure.persistence.memory import (
    InMemoryAdminSettingsRepository,
    InMemoryBannerRepository,
    InMemoryQuestionRepository,
    InMemoryUserStatsReader,
)
from ficarchive.util.di.base import Provider
from ficarchive.util.di.scope import Scope

logger = logging.getLogger(__name__)


class InfrastructureProvider(Provider):
    """Process-wide adapters. The in-memory stores live for the app's lifetime."""

    config = from_context(provides=Config, scope=Scope.APP)

    identity_resolver = provide(
        SessionIdentityResolver,
        scope=Scope.APP,
        provides=IdentityResolver,
    )
    question_repo = provide(
        InMemoryQuestionRepository,
        scope=Scope.APP,
        provides=QuestionRepository,
    )
    banner_repo = provide(InMemoryBannerRepository, scope=Scope.APP, provides=BannerRepository)

    @provide(scope=Scope.APP)
    def get_cache(self) -> Cache:
        return InMemoryCache()

    @provide(scope=Scope.APP)
    def get_accounts(self) -> AccountRepository:
        return AccountDirectory()

    @provide(scope=Scope.APP)
    def get_user_stats(self) -> UserStatsReader:
        return InMemoryUserStatsReader()

    @provide(scope=Scope.APP)
    def get_translator(self, config: Config) -> Translator:
        """Provide the YAML translator for the configured locale."""
        logger.info("Loading %s translations", config.i18n.locale)
        return YamlTranslator(
            locale=config.i18n.locale,
            locales_dir=config.i18n.locales_dir or None,
        )

    @provide(scope=Scope.APP)
    def get_admin_settings_repo(self, config: Config) -> AdminSettingsRepository:
        """Admin settings start from config and are edited at runtime."""
        initial = config.admin_settings
        return InMemoryAdminSettingsRepository(
            AdminSettings(
                tag_wrangling_off=initial.tag_wrangling_off,
                enable_test_caching=initial.enable_test_caching,
            )
        )
