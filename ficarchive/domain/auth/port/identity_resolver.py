"""Identity resolution port: who is signed in on this session."""

from abc import abstractmethod
from collections.abc import MutableMapping
from typing import Any, Protocol

from ficarchive.domain.auth.model.identity import Admin, User
from ficarchive.domain.auth.model.value import AdminId, UserId
from ficarchive.domain.shared.port import Port


class IdentityResolver(Port, Protocol):
    """Resolves the current user and admin from the request session.

    Credentials are checked by the identity provider; this port only records
    and reads the outcome in the session. User and admin sessions are
    independent.
    """

    @abstractmethod
    async def current_user(self, session: MutableMapping[str, Any]) -> User | None:
        ...

    @abstractmethod
    async def current_admin(self, session: MutableMapping[str, Any]) -> Admin | None:
        ...

    @abstractmethod
    def sign_in_user(self, session: MutableMapping[str, Any], user_id: UserId) -> None: ...

    @abstractmethod
    def sign_in_admin(self, session: MutableMapping[str, Any], admin_id: AdminId) -> None: ...

    @abstractmethod
    def sign_out(self, session: MutableMapping[str, Any]) -> None:
        """Forget the signed-in user."""
        ...

    @abstractmethod
    def sign_out_admin(self, session: MutableMapping[str, Any]) -> None: ...
