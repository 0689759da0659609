"""Session-backed identity resolution."""

import logging
from collections.abc import Iterable, MutableMapping
from typing import Any

from ficarchive.domain.auth.model.identity import Admin, User
from ficarchive.domain.auth.model.value import AdminId, UserId
from ficarchive.domain.auth.port.account import AccountRepository
from ficarchive.domain.auth.port.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)

USER_SESSION_KEY = "user_id"
ADMIN_SESSION_KEY = "admin_id"


class AccountDirectory(AccountRepository):
    """Known user and admin accounts held in memory, keyed by id."""

    def __init__(self, users: Iterable[User] = (), admins: Iterable[Admin] = ()) -> None:
        self._users: dict[int, User] = {u.id.root: u for u in users}
        self._admins: dict[int, Admin] = {a.id.root: a for a in admins}

    def add_user(self, user: User) -> None:
        self._users[user.id.root] = user

    def add_admin(self, admin: Admin) -> None:
        self._admins[admin.id.root] = admin

    async def user(self, id: int) -> User | None:
        return self._users.get(id)

    async def admin(self, id: int) -> Admin | None:
        return self._admins.get(id)

    async def user_by_login(self, login: str) -> User | None:
        return next((u for u in self._users.values() if u.login == login), None)

    async def admin_by_login(self, login: str) -> Admin | None:
        return next((a for a in self._admins.values() if a.login == login), None)

    async def save_user(self, user: User) -> None:
        self._users[user.id.root] = user


class SessionIdentityResolver(IdentityResolver):
    """Reads and writes the account ids kept in the cookie session."""

    def __init__(self, accounts: AccountRepository) -> None:
        self._accounts = accounts

    async def current_user(self, session: MutableMapping[str, Any]) -> User | None:
        user_id = session.get(USER_SESSION_KEY)
        if user_id is None:
            return None
        user = await self._accounts.user(int(user_id))
        if user is None:
            # Account removed since sign-in
            logger.info("Dropping session for unknown user %s", user_id)
            session.pop(USER_SESSION_KEY, None)
        return user

    async def current_admin(self, session: MutableMapping[str, Any]) -> Admin | None:
        admin_id = session.get(ADMIN_SESSION_KEY)
        if admin_id is None:
            return None
        admin = await self._accounts.admin(int(admin_id))
        if admin is None:
            logger.info("Dropping session for unknown admin %s", admin_id)
            session.pop(ADMIN_SESSION_KEY, None)
        return admin

    def sign_in_user(self, session: MutableMapping[str, Any], user_id: UserId) -> None:
        session[USER_SESSION_KEY] = user_id.root

    def sign_in_admin(self, session: MutableMapping[str, Any], admin_id: AdminId) -> None:
        session[ADMIN_SESSION_KEY] = admin_id.root

    def sign_out(self, session: MutableMapping[str, Any]) -> None:
        session.pop(USER_SESSION_KEY, None)

    def sign_out_admin(self, session: MutableMapping[str, Any]) -> None:
        session.pop(ADMIN_SESSION_KEY, None)
