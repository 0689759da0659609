"""AccessPolicy: the guards every handler runs before acting.

Each guard inspects the RequestContext and returns a Decision. Guards have no
side effects; denials are logged and returned for the web layer to apply.
"""

from __future__ import annotations

import html
import logging
from typing import Any

from ficarchive.config import DisplayConfig, NavigationConfig
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.auth.model.identity import User
from ficarchive.domain.auth.model.value import Permission
from ficarchive.domain.auth.service.suspension import SuspensionWindow
from ficarchive.domain.session.cookies import VIEW_ADULT
from ficarchive.domain.shared.authorization.capability import (
    AdminHideable,
    Collection,
    CollectionItem,
    Official,
    Restrictable,
    Visible,
)
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.domain.shared.authorization.decision import ALLOW, Decision, Deny, Flash
from ficarchive.domain.shared.port.translator import Translator
from ficarchive.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AccessPolicy(Service):
    """Authorization guards for admins, users, owners and hidden content."""

    _navigation: NavigationConfig
    _display: DisplayConfig
    _translator: Translator
    _settings: AdminSettings

    # -------------------------------------------------------------------------
    # Denial helpers
    # -------------------------------------------------------------------------

    def _t(self, key: str, **params: Any) -> str:
        return self._translator.translate(key, **params)

    def _deny(self, ctx: RequestContext, deny: Deny) -> Deny:
        logger.warning(
            "Authorization denied: identity=%s guard=%s path=%s",
            ctx.describe(),
            deny.guard,
            ctx.path,
        )
        return deny

    def access_denied(self, ctx: RequestContext, redirect: str | None = None) -> Deny:
        """Generic refusal: back to the user's page, or to sign-in for guests.

        The current location is remembered so signing in returns here.
        """
        if ctx.user is not None:
            destination = redirect or self._navigation.path_for_user(ctx.user.login)
            message = self._t("application.access_denied.logged_in")
        else:
            destination = redirect or self._navigation.sign_in_path
            message = self._t("application.access_denied.logged_out")
        return self._deny(
            ctx,
            Deny(
                redirect_to=destination,
                guard="access_denied",
                flash=Flash.error(message),
                store_location=True,
                status_code=403 if ctx.user is not None else 401,
            ),
        )

    def admin_only_access_denied(self, ctx: RequestContext) -> Deny:
        """Refusal raised by a policy object against an admin."""
        return self._deny(
            ctx,
            Deny(
                redirect_to=self._navigation.root_path,
                guard="admin_policy",
                flash=Flash.error(self._t("admin.access.page_access_denied")),
                api_message=self._t("admin.access.action_access_denied"),
            ),
        )

    def not_allowed(self, ctx: RequestContext, fallback: str | None = None) -> Deny:
        return self._deny(
            ctx,
            Deny(
                redirect_to=fallback or self._navigation.root_path,
                guard="not_allowed",
                flash=Flash.error(self._t("application.not_allowed")),
            ),
        )

    # -------------------------------------------------------------------------
    # Role guards
    # -------------------------------------------------------------------------

    def admin_only(self, ctx: RequestContext) -> Decision:
        """Keep users and guests out of admin areas."""
        if ctx.logged_in_as_admin:
            return ALLOW
        return self._deny(
            ctx,
            Deny(
                redirect_to=self._navigation.root_path,
                guard="admin_only",
                flash=Flash.notice(self._t("admin.access.page_access_denied")),
                store_location=True,
                api_message=self._t("admin.access.action_access_denied"),
            ),
        )

    def users_only(self, ctx: RequestContext) -> Decision:
        """Only signed-in users (admins acting as admins are refused)."""
        return ALLOW if ctx.logged_in else self.access_denied(ctx)

    def opendoors_only(self, ctx: RequestContext) -> Decision:
        if ctx.logged_in and ctx.permit(Permission.OPENDOORS):
            return ALLOW
        return self.access_denied(ctx)

    def user_logout_required(self, ctx: RequestContext) -> Decision:
        """Users must sign out before signing in as an admin."""
        if not ctx.logged_in:
            return ALLOW
        return self._deny(
            ctx,
            Deny(
                redirect_to=self._navigation.root_path,
                guard="user_logout_required",
                flash=Flash.notice(self._t("application.user_logout_required")),
            ),
        )

    def admin_logout_required(self, ctx: RequestContext) -> Decision:
        """Admins must sign out before signing in as a user."""
        if not ctx.logged_in_as_admin:
            return ALLOW
        return self._deny(
            ctx,
            Deny(
                redirect_to=self._navigation.root_path,
                guard="admin_logout_required",
                flash=Flash.notice(self._t("application.admin_logout_required")),
            ),
        )

    def check_permission_to_wrangle(self, ctx: RequestContext) -> Decision:
        if self._settings.tag_wrangling_off and not ctx.logged_in_as_admin:
            return self._deny(
                ctx,
                Deny(
                    redirect_to=self._navigation.root_path,
                    guard="check_permission_to_wrangle",
                    flash=Flash.error(self._t("application.wrangling_disabled")),
                ),
            )
        if ctx.logged_in_as_admin or ctx.permit(Permission.TAG_WRANGLER):
            return ALLOW
        return self.access_denied(ctx)

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    def owns(self, ctx: RequestContext, item: Any) -> bool:
        """Does the signed-in user own item? A User item is owned only by itself."""
        if item is None or ctx.user is None:
            return False
        if isinstance(item, User):
            return ctx.user == item
        return ctx.user.is_author_of(item)

    def check_ownership(
        self, ctx: RequestContext, item: Any, fallback: str | None = None
    ) -> Decision:
        if self.owns(ctx, item):
            return ALLOW
        return self.access_denied(ctx, redirect=fallback)

    def check_ownership_or_admin(
        self, ctx: RequestContext, item: Any, fallback: str | None = None
    ) -> Decision:
        if ctx.logged_in_as_admin:
            return ALLOW
        return self.check_ownership(ctx, item, fallback)

    def collection_maintainers_only(self, ctx: RequestContext, collection: Any) -> Decision:
        if (
            ctx.user is not None
            and isinstance(collection, Collection)
            and collection.is_maintained_by(ctx.user.id)
        ):
            return ALLOW
        return self.access_denied(ctx)

    def collection_owners_only(self, ctx: RequestContext, collection: Any) -> Decision:
        if (
            ctx.user is not None
            and isinstance(collection, Collection)
            and collection.is_owned_by(ctx.user.id)
        ):
            return ALLOW
        return self.access_denied(ctx)

    # -------------------------------------------------------------------------
    # Visibility
    # -------------------------------------------------------------------------

    @staticmethod
    def is_hidden(resource: Any) -> bool:
        """Unpublished or hidden by an admin, for kinds that support either."""
        if isinstance(resource, Visible) and not resource.is_visible():
            return True
        return isinstance(resource, AdminHideable) and resource.is_hidden_by_admin()

    def check_visibility(self, ctx: RequestContext, resource: Any) -> Decision:
        """May the requester see this page?

        Restricted items send guests to sign in (encouraging sign-up) rather
        than refusing outright.
        """
        if (
            isinstance(resource, Restrictable)
            and resource.is_restricted()
            and ctx.is_guest
        ):
            return self._deny(
                ctx,
                Deny(
                    redirect_to=f"{self._navigation.sign_in_path}?restricted=true",
                    guard="check_visibility",
                    status_code=401,
                ),
            )

        if isinstance(resource, Official):
            if ctx.logged_in_as_admin or self.owns(ctx, resource) or resource.is_official():
                return ALLOW
            return self.access_denied(ctx)

        can_view_hidden = ctx.logged_in_as_admin or self.owns(ctx, resource)
        if self.is_hidden(resource) and not can_view_hidden:
            return self.access_denied(ctx)
        return ALLOW

    def check_visibility_for(self, ctx: RequestContext, parent: Any) -> Decision:
        """Guard pages hanging off parent (comments, kudos...)."""
        if ctx.logged_in_as_admin or self.owns(ctx, parent):
            return ALLOW

        unrevealed = isinstance(parent, CollectionItem) and parent.is_in_unrevealed_collection()
        if self.is_hidden(parent) or unrevealed:
            return self.access_denied(ctx, redirect=self._navigation.root_path)
        return ALLOW

    def can_see_adult(self, ctx: RequestContext, work: Any = None) -> bool:
        """Skip the adult-content interstitial?"""
        if ctx.cookies.get(VIEW_ADULT) or ctx.logged_in_as_admin:
            return True
        if ctx.user is None:
            return False
        if work is not None and ctx.user.is_author_of(work):
            return True
        return ctx.user.preference.adult

    # -------------------------------------------------------------------------
    # Account status
    # -------------------------------------------------------------------------

    def _contact_abuse_link(self) -> str:
        label = html.escape(self._t("users.contact_abuse"))
        return f'<a href="{self._navigation.abuse_report_path}">{label}</a>'

    def _suspension_notice(self, user: User) -> Flash:
        window = SuspensionWindow.for_end(user.suspension.suspended_until)  # type: ignore[arg-type]
        time_zone = user.preference.time_zone or self._display.default_time_zone
        return Flash.error(
            self._t(
                "users.status.suspension_notice_html",
                suspended_until=window.display(time_zone, self._display.time_format),
                contact_abuse_link=self._contact_abuse_link(),
            )
        )

    def check_user_status(self, ctx: RequestContext) -> Decision:
        """Suspended and banned users may not add or edit content."""
        user = ctx.user
        if user is None or not (user.is_suspended or user.is_banned):
            return ALLOW

        if user.is_banned:
            flash = Flash.error(
                self._t(
                    "users.status.ban_notice_html",
                    contact_abuse_link=self._contact_abuse_link(),
                )
            )
        else:
            flash = self._suspension_notice(user)
        return self._deny(
            ctx,
            Deny(
                redirect_to=self._navigation.path_for_user(user.login),
                guard="check_user_status",
                flash=flash,
            ),
        )

    def check_user_not_suspended(self, ctx: RequestContext) -> Decision:
        """Temporarily suspended users may not delete content; banned users may."""
        user = ctx.user
        if user is None or not user.is_suspended:
            return ALLOW
        return self._deny(
            ctx,
            Deny(
                redirect_to=self._navigation.path_for_user(user.login),
                guard="check_user_not_suspended",
                flash=self._suspension_notice(user),
            ),
        )
