"""DI provider for the auth domain: request context, guards and lifecycle."""

import logging

from dishka import from_context, provide
from starlette.requests import Request

from ficarchive.config import Config
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.auth.port.identity_resolver import IdentityResolver
from ficarchive.domain.auth.port.user_stats import UserStatsReader
from ficarchive.domain.auth.service.user_menu import UserMenuService
from ficarchive.domain.session.lifecycle import RequestLifecycle
from ficarchive.domain.shared.authorization.context import RequestContext, RequestFormat
from ficarchive.domain.shared.authorization.policy import AccessPolicy
from ficarchive.domain.shared.port.cache import Cache
from ficarchive.domain.shared.port.translator import Translator
from ficarchive.util.di.base import Provider
from ficarchive.util.di.scope import Scope

logger = logging.getLogger(__name__)


def detect_format(request: Request) -> RequestFormat:
    """Pick the response format from the path suffix, ``format`` param or Accept header."""
    path = request.url.path
    explicit = request.query_params.get("format")
    if path.endswith(".json") or explicit == "json":
        return RequestFormat.JSON
    if path.endswith(".js") or explicit == "js":
        return RequestFormat.JS

    accept = request.headers.get("accept", "")
    if "text/html" in accept or not accept:
        return RequestFormat.HTML
    if "javascript" in accept:
        return RequestFormat.JS
    if "application/json" in accept:
        return RequestFormat.JSON
    return RequestFormat.HTML


def full_path(request: Request) -> str:
    """Path plus query string, as remembered by location memory."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class AuthProvider(Provider):
    """DI provider for per-request identity and the guards that read it."""

    request = from_context(provides=Request, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    async def get_request_context(
        self, request: Request, resolver: IdentityResolver
    ) -> RequestContext:
        """Build the one RequestContext of this request."""
        session = request.session
        ctx = RequestContext(
            user=await resolver.current_user(session),
            admin=await resolver.current_admin(session),
            path=full_path(request),
            format=detect_format(request),
            cookies=dict(request.cookies),
            session=session,
            params=dict(request.query_params),
        )
        logger.debug("Request context: identity=%s format=%s", ctx.describe(), ctx.format)
        return ctx

    @provide(scope=Scope.UOW)
    def get_access_policy(
        self, config: Config, translator: Translator, settings: AdminSettings
    ) -> AccessPolicy:
        return AccessPolicy(
            _navigation=config.navigation,
            _display=config.display,
            _translator=translator,
            _settings=settings,
        )

    @provide(scope=Scope.UOW)
    def get_request_lifecycle(self, config: Config) -> RequestLifecycle:
        return RequestLifecycle(_session_config=config.session, _navigation=config.navigation)

    @provide(scope=Scope.UOW)
    def get_user_menu_service(
        self, config: Config, stats: UserStatsReader, cache: Cache
    ) -> UserMenuService:
        return UserMenuService(_stats=stats, _cache=cache, _config=config.cache)
