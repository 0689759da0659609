"""Capability protocols implemented by protected resources.

A resource kind implements only the capabilities it has; the policy engine
asks ``isinstance(resource, Visible)`` and never probes attributes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ficarchive.domain.auth.model.value import UserId


@runtime_checkable
class Owned(Protocol):
    """Resource with one or more owning users (works, bookmarks, skins...)."""

    def is_owned_by(self, user_id: UserId) -> bool: ...


@runtime_checkable
class Restrictable(Protocol):
    """Resource that can be limited to logged-in readers."""

    def is_restricted(self) -> bool: ...


@runtime_checkable
class Visible(Protocol):
    """Resource with a publication/visibility flag."""

    def is_visible(self) -> bool: ...


@runtime_checkable
class AdminHideable(Protocol):
    """Resource an admin can hide from everyone but its owners."""

    def is_hidden_by_admin(self) -> bool: ...


@runtime_checkable
class Official(Protocol):
    """Site skins: visible to everyone once marked official."""

    def is_official(self) -> bool: ...


@runtime_checkable
class CollectionItem(Protocol):
    """Resource that may sit in a collection whose contents are not revealed yet."""

    def is_in_unrevealed_collection(self) -> bool: ...


@runtime_checkable
class Collection(Protocol):
    """A collection with owners and maintainers."""

    def is_owned_by(self, user_id: UserId) -> bool: ...

    def is_maintained_by(self, user_id: UserId) -> bool: ...
