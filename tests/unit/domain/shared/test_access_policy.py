"""Tests for AccessPolicy guards."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

from ficarchive.config import DisplayConfig, NavigationConfig
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.auth.model import Admin, AdminId, Permission, Preference, Suspension, User, UserId
from ficarchive.domain.shared.authorization.context import RequestContext
from ficarchive.domain.shared.authorization.decision import Allow, Deny, FlashLevel
from ficarchive.domain.shared.authorization.policy import AccessPolicy
from ficarchive.domain.session.cookies import VIEW_ADULT


class _KeyTranslator:
    """Returns the key itself and remembers the parameters it was given."""

    def __init__(self) -> None:
        self.params: dict[str, dict[str, Any]] = {}

    def translate(self, key: str, default: str | None = None, **params: Any) -> str:
        self.params[key] = params
        return key


@dataclass
class _Work:
    owner: UserId | None = None
    visible: bool = True
    hidden_by_admin: bool = False
    restricted: bool = False
    unrevealed: bool = False

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner == user_id

    def is_visible(self) -> bool:
        return self.visible

    def is_hidden_by_admin(self) -> bool:
        return self.hidden_by_admin

    def is_restricted(self) -> bool:
        return self.restricted

    def is_in_unrevealed_collection(self) -> bool:
        return self.unrevealed


@dataclass
class _Skin:
    owner: UserId | None = None
    official: bool = False

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.owner == user_id

    def is_official(self) -> bool:
        return self.official


@dataclass
class _Collection:
    owners: set[int] = field(default_factory=set)
    maintainers: set[int] = field(default_factory=set)

    def is_owned_by(self, user_id: UserId) -> bool:
        return user_id.root in self.owners

    def is_maintained_by(self, user_id: UserId) -> bool:
        return user_id.root in self.maintainers | self.owners


def _make_user(
    id: int = 7,
    login: str = "bob",
    *,
    permissions: frozenset[str] = frozenset(),
    preference: Preference | None = None,
    suspension: Suspension | None = None,
) -> User:
    return User(
        id=UserId(id),
        login=login,
        permissions=permissions,
        preference=preference or Preference(),
        suspension=suspension or Suspension(),
    )


def _make_admin() -> Admin:
    return Admin(id=AdminId(1), login="root")


def _make_policy(
    translator: _KeyTranslator | None = None, *, tag_wrangling_off: bool = False
) -> AccessPolicy:
    return AccessPolicy(
        _navigation=NavigationConfig(),
        _display=DisplayConfig(),
        _translator=translator or _KeyTranslator(),
        _settings=AdminSettings(tag_wrangling_off=tag_wrangling_off),
    )


def _ctx(
    user: User | None = None, admin: Admin | None = None, **kwargs: Any
) -> RequestContext:
    return RequestContext(user=user, admin=admin, path="/works/1", **kwargs)


class TestDecisions:
    def test_allow_is_truthy_and_deny_is_falsy(self):
        policy = _make_policy()

        assert policy.users_only(_ctx(user=_make_user()))
        assert not policy.users_only(_ctx())

    def test_guards_compose_with_or(self):
        policy = _make_policy()
        ctx = _ctx()

        result = policy.users_only(ctx) or "fallback"

        assert result == "fallback"


class TestAdminOnly:
    def test_admin_is_allowed(self):
        assert isinstance(_make_policy().admin_only(_ctx(admin=_make_admin())), Allow)

    def test_user_is_sent_to_root_with_notice(self):
        deny = _make_policy().admin_only(_ctx(user=_make_user()))

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/"
        assert deny.store_location is True
        assert deny.flash is not None
        assert deny.flash.level is FlashLevel.NOTICE
        assert deny.flash.message == "admin.access.page_access_denied"
        assert deny.errors == ["admin.access.action_access_denied"]

    def test_guest_is_refused(self):
        assert isinstance(_make_policy().admin_only(_ctx()), Deny)


class TestAccessDenied:
    def test_user_goes_to_own_page(self):
        deny = _make_policy().access_denied(_ctx(user=_make_user()))

        assert deny.redirect_to == "/users/bob"
        assert deny.flash is not None
        assert deny.flash.level is FlashLevel.ERROR
        assert deny.flash.message == "application.access_denied.logged_in"
        assert deny.store_location is True
        assert deny.status_code == 403

    def test_guest_goes_to_sign_in(self):
        deny = _make_policy().access_denied(_ctx())

        assert deny.redirect_to == "/users/login"
        assert deny.flash is not None
        assert deny.flash.message == "application.access_denied.logged_out"
        assert deny.status_code == 401

    def test_redirect_override(self):
        deny = _make_policy().access_denied(_ctx(user=_make_user()), redirect="/works/1")

        assert deny.redirect_to == "/works/1"

    def test_always_falsy(self):
        assert not _make_policy().access_denied(_ctx(user=_make_user()))


class TestRoleGuards:
    def test_users_only_refuses_admin_without_user(self):
        deny = _make_policy().users_only(_ctx(admin=_make_admin()))

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/users/login"

    def test_opendoors_requires_permission(self):
        policy = _make_policy()
        opendoors = _make_user(permissions=frozenset({Permission.OPENDOORS}))

        assert policy.opendoors_only(_ctx(user=opendoors))
        assert not policy.opendoors_only(_ctx(user=_make_user()))
        assert not policy.opendoors_only(_ctx())

    def test_user_logout_required(self):
        policy = _make_policy()

        deny = policy.user_logout_required(_ctx(user=_make_user()))

        assert isinstance(deny, Deny)
        assert deny.flash is not None
        assert deny.flash.message == "application.user_logout_required"
        assert policy.user_logout_required(_ctx(admin=_make_admin()))

    def test_admin_logout_required(self):
        policy = _make_policy()

        assert not policy.admin_logout_required(_ctx(admin=_make_admin()))
        assert policy.admin_logout_required(_ctx(user=_make_user()))

    def test_not_allowed_uses_fallback_or_root(self):
        policy = _make_policy()
        ctx = _ctx(user=_make_user())

        assert policy.not_allowed(ctx).redirect_to == "/"
        assert policy.not_allowed(ctx, "/tags").redirect_to == "/tags"


class TestWrangling:
    def test_wrangler_allowed_when_enabled(self):
        wrangler = _make_user(permissions=frozenset({"tag_wrangler"}))

        assert _make_policy().check_permission_to_wrangle(_ctx(user=wrangler))

    def test_plain_user_is_access_denied(self):
        deny = _make_policy().check_permission_to_wrangle(_ctx(user=_make_user()))

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/users/bob"

    def test_disabled_wrangling_refuses_wranglers(self):
        policy = _make_policy(tag_wrangling_off=True)
        wrangler = _make_user(permissions=frozenset({"tag_wrangler"}))

        deny = policy.check_permission_to_wrangle(_ctx(user=wrangler))

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/"
        assert deny.flash is not None
        assert deny.flash.message == "application.wrangling_disabled"

    def test_disabled_wrangling_still_allows_admins(self):
        policy = _make_policy(tag_wrangling_off=True)

        assert policy.check_permission_to_wrangle(_ctx(admin=_make_admin()))


class TestOwnership:
    def test_user_owns_itself(self):
        user = _make_user()

        assert _make_policy().owns(_ctx(user=user), user)

    def test_same_id_counts_as_same_user(self):
        policy = _make_policy()
        reloaded = _make_user(login="bob-renamed")

        assert policy.owns(_ctx(user=_make_user()), reloaded)

    def test_other_user_is_not_owned(self):
        assert not _make_policy().owns(_ctx(user=_make_user()), _make_user(id=8, login="eve"))

    def test_owned_resource(self):
        policy = _make_policy()
        ctx = _ctx(user=_make_user())

        assert policy.owns(ctx, _Work(owner=UserId(7)))
        assert not policy.owns(ctx, _Work(owner=UserId(8)))

    def test_nothing_owned_without_user_or_item(self):
        policy = _make_policy()

        assert not policy.owns(_ctx(), _Work(owner=UserId(7)))
        assert not policy.owns(_ctx(user=_make_user()), None)

    def test_check_ownership_redirects_to_fallback(self):
        deny = _make_policy().check_ownership(
            _ctx(user=_make_user()), _Work(owner=UserId(8)), fallback="/works/1"
        )

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/works/1"

    def test_admin_passes_only_the_or_admin_variant(self):
        policy = _make_policy()
        ctx = _ctx(admin=_make_admin())
        work = _Work(owner=UserId(8))

        assert not policy.check_ownership(ctx, work)
        assert policy.check_ownership_or_admin(ctx, work)

    def test_collection_guards(self):
        policy = _make_policy()
        ctx = _ctx(user=_make_user())
        maintained = _Collection(maintainers={7})

        assert policy.collection_maintainers_only(ctx, maintained)
        assert not policy.collection_owners_only(ctx, maintained)
        assert policy.collection_owners_only(ctx, _Collection(owners={7}))
        assert not policy.collection_maintainers_only(_ctx(), maintained)
        assert not policy.collection_maintainers_only(ctx, None)


class TestCheckVisibility:
    def test_restricted_work_sends_guest_to_sign_in(self):
        deny = _make_policy().check_visibility(_ctx(), _Work(restricted=True))

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/users/login?restricted=true"
        assert deny.flash is None

    def test_restricted_work_allowed_for_user_or_admin(self):
        policy = _make_policy()
        work = _Work(restricted=True)

        assert policy.check_visibility(_ctx(user=_make_user()), work)
        assert policy.check_visibility(_ctx(admin=_make_admin()), work)

    def test_hidden_work_refused_to_strangers(self):
        policy = _make_policy()
        stranger = _ctx(user=_make_user(id=8, login="eve"))

        assert not policy.check_visibility(stranger, _Work(owner=UserId(7), visible=False))
        assert not policy.check_visibility(stranger, _Work(owner=UserId(7), hidden_by_admin=True))

    def test_hidden_work_visible_to_owner_and_admin(self):
        policy = _make_policy()
        work = _Work(owner=UserId(7), visible=False)

        assert policy.check_visibility(_ctx(user=_make_user()), work)
        assert policy.check_visibility(_ctx(admin=_make_admin()), work)

    def test_visible_work_allowed_for_guest(self):
        assert _make_policy().check_visibility(_ctx(), _Work())

    def test_skin_rules(self):
        policy = _make_policy()

        assert policy.check_visibility(_ctx(), _Skin(official=True))
        assert not policy.check_visibility(_ctx(), _Skin(owner=UserId(7)))
        assert policy.check_visibility(_ctx(user=_make_user()), _Skin(owner=UserId(7)))
        assert policy.check_visibility(_ctx(admin=_make_admin()), _Skin(owner=UserId(7)))

    def test_resource_without_capabilities_is_visible(self):
        assert _make_policy().check_visibility(_ctx(), object())


class TestCheckVisibilityFor:
    def test_hidden_parent_redirects_to_root(self):
        deny = _make_policy().check_visibility_for(_ctx(), _Work(hidden_by_admin=True))

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/"

    def test_unrevealed_or_invisible_parent_is_refused(self):
        policy = _make_policy()

        assert not policy.check_visibility_for(_ctx(), _Work(unrevealed=True))
        assert not policy.check_visibility_for(_ctx(), _Work(visible=False))

    def test_owner_and_admin_bypass(self):
        policy = _make_policy()
        parent = _Work(owner=UserId(7), hidden_by_admin=True, unrevealed=True)

        assert policy.check_visibility_for(_ctx(user=_make_user()), parent)
        assert policy.check_visibility_for(_ctx(admin=_make_admin()), parent)

    def test_visible_parent_is_allowed(self):
        assert _make_policy().check_visibility_for(_ctx(), _Work())


class TestCanSeeAdult:
    def test_cookie_or_admin(self):
        policy = _make_policy()

        assert policy.can_see_adult(_ctx(cookies={VIEW_ADULT: "1"}))
        assert policy.can_see_adult(_ctx(admin=_make_admin()))

    def test_guest_without_cookie(self):
        assert not _make_policy().can_see_adult(_ctx())

    def test_author_and_preference(self):
        policy = _make_policy()
        user = _make_user()

        assert policy.can_see_adult(_ctx(user=user), _Work(owner=UserId(7)))
        assert not policy.can_see_adult(_ctx(user=user), _Work(owner=UserId(8)))
        adult_reader = _make_user(preference=Preference(adult=True))
        assert policy.can_see_adult(_ctx(user=adult_reader))


class TestUserStatus:
    def test_active_user_and_guest_pass(self):
        policy = _make_policy()

        assert policy.check_user_status(_ctx(user=_make_user()))
        assert policy.check_user_status(_ctx())

    def test_suspended_user_sees_unban_time(self):
        translator = _KeyTranslator()
        policy = _make_policy(translator)
        user = _make_user(
            suspension=Suspension.until(datetime(2024, 3, 10, 19, 0, tzinfo=UTC))
        )

        deny = policy.check_user_status(_ctx(user=user))

        assert isinstance(deny, Deny)
        assert deny.redirect_to == "/users/bob"
        assert deny.flash is not None
        assert deny.flash.message == "users.status.suspension_notice_html"
        params = translator.params["users.status.suspension_notice_html"]
        assert params["suspended_until"] == "Mon 11 Mar 2024 06:51PM UTC"
        assert params["contact_abuse_link"] == (
            '<a href="/abuse_reports/new">users.contact_abuse</a>'
        )

    def test_unban_time_rendered_in_users_zone(self):
        translator = _KeyTranslator()
        policy = _make_policy(translator)
        user = _make_user(
            preference=Preference(time_zone="America/New_York"),
            suspension=Suspension.until(datetime(2024, 3, 10, 19, 0, tzinfo=UTC)),
        )

        policy.check_user_status(_ctx(user=user))

        params = translator.params["users.status.suspension_notice_html"]
        assert params["suspended_until"] == "Mon 11 Mar 2024 02:51PM EDT"

    def test_date_only_suspension_lifts_the_next_evening(self):
        translator = _KeyTranslator()
        policy = _make_policy(translator)
        user = _make_user(suspension=Suspension.until(date(2024, 3, 10)))

        deny = policy.check_user_status(_ctx(user=user))

        assert isinstance(deny, Deny)
        params = translator.params["users.status.suspension_notice_html"]
        assert params["suspended_until"] == "Mon 11 Mar 2024 06:51PM UTC"

    def test_banned_user_gets_ban_notice(self):
        deny = _make_policy().check_user_status(_ctx(user=_make_user(suspension=Suspension.ban())))

        assert isinstance(deny, Deny)
        assert deny.flash is not None
        assert deny.flash.message == "users.status.ban_notice_html"

    def test_not_suspended_guard_ignores_bans(self):
        policy = _make_policy()
        banned = _make_user(suspension=Suspension.ban())
        suspended = _make_user(suspension=Suspension.until(datetime(2024, 3, 10, tzinfo=UTC)))

        assert policy.check_user_not_suspended(_ctx(user=banned))
        assert not policy.check_user_not_suspended(_ctx(user=suspended))
