"""Hooks that run around every request.

before(): reset the flash marker, reconcile a session that lost its
user_credentials cookie, remember the location and honour hide_banner.
after(): emit the flash and credential cookies for the final state.
"""

import logging
from dataclasses import field

from ficarchive.config import NavigationConfig, SessionConfig
from ficarchive.domain.navigation.location import LocationMemory
from ficarchive.domain.session import cookies
from ficarchive.domain.session.cookies import CookieMutation
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.domain.shared.authorization.decision import Deny
from ficarchive.domain.shared.service import Service

logger = logging.getLogger(__name__)

HIDE_BANNER_KEY = "hide_banner"


class RequestLifecycle(Service):
    """Per-request pre/post processing shared by every route."""

    _session_config: SessionConfig
    _navigation: NavigationConfig
    _mutations: list[CookieMutation] = field(default_factory=list)

    def location_memory(self, ctx: RequestContext) -> LocationMemory:
        return LocationMemory(ctx.session, self._navigation.max_return_to_length)

    def _is_sessions_path(self, path: str) -> bool:
        return cookies.is_sessions_path(path, self._session_config.sessions_paths)

    def before(self, ctx: RequestContext) -> Deny | None:
        """Run the pre-request hooks. A Deny halts the request with a redirect."""
        self._mutations.extend(cookies.clear_flash_signal(ctx.cookies))

        if cookies.is_lost_session(
            user_logged_in=ctx.logged_in,
            cookies=ctx.cookies,
            path=ctx.path,
            sessions_paths=self._session_config.sessions_paths,
        ):
            logger.error("Forcing logout: identity=%s path=%s", ctx.describe(), ctx.path)
            return Deny(
                redirect_to=self._navigation.lost_cookie_path,
                guard="lost_session",
                sign_out=True,
                status_code=401,
            )

        # JSON and JS requests and the sign-in pages are never navigation targets
        if not ctx.format.is_api and not self._is_sessions_path(ctx.path):
            self.location_memory(ctx).store(ctx.path)

        if ctx.params.get(HIDE_BANNER_KEY):
            ctx.session[HIDE_BANNER_KEY] = True
        return None

    def after(self, ctx: RequestContext) -> list[CookieMutation]:
        """Cookie mutations to apply to the outgoing response, redirects included."""
        max_age = self._session_config.credentials_max_age_days * 24 * 60 * 60
        self._mutations.extend(cookies.flash_signal(not ctx.flash.is_empty()))
        self._mutations.extend(
            cookies.credential_signals(
                user_logged_in=ctx.logged_in,
                admin_logged_in=ctx.logged_in_as_admin,
                cookies=ctx.cookies,
                max_age=max_age,
            )
        )
        return cookies.merge(self._mutations)


def banner_hidden(ctx: RequestContext) -> bool:
    return bool(ctx.session.get(HIDE_BANNER_KEY))
