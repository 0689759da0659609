"""The three kinds of requester."""

from dataclasses import dataclass, field
from typing import Any

from ficarchive.domain.auth.model.value import (
    AdminId,
    Permission,
    Preference,
    Suspension,
    SuspensionStatus,
    UserId,
)
from ficarchive.domain.shared.authorization.capability import Owned


@dataclass(frozen=True)
class Identity:
    """Base for all request identities."""

    pass


@dataclass(frozen=True)
class Anonymous(Identity):
    """Nobody is signed in."""

    pass


@dataclass(frozen=True, eq=False)
class User(Identity):
    """A signed-in archive user.

    Two User values are equal when they carry the same id, whatever else was
    loaded alongside them.
    """

    id: UserId
    login: str
    permissions: frozenset[str] = field(default_factory=frozenset)
    preference: Preference = field(default_factory=Preference)
    suspension: Suspension = field(default_factory=Suspension)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, User) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def is_suspended(self) -> bool:
        return self.suspension.status is SuspensionStatus.SUSPENDED

    @property
    def is_banned(self) -> bool:
        return self.suspension.status is SuspensionStatus.BANNED

    def has_permission(self, permission: Permission | str) -> bool:
        return str(permission) in self.permissions

    def is_author_of(self, item: Any) -> bool:
        """True if item is an Owned resource owned by this user."""
        return isinstance(item, Owned) and item.is_owned_by(self.id)


@dataclass(frozen=True, eq=False)
class Admin(Identity):
    """A signed-in site administrator (separate account from any user)."""

    id: AdminId
    login: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Admin) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)
