"""Per-request context handed to every guard.

One RequestContext is built per request (dishka Scope.UOW) and discarded when
the request ends, so the "current identity" never outlives its request.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ficarchive.domain.auth.model.identity import Admin, Anonymous, Identity, User
from ficarchive.domain.auth.model.value import Permission
from ficarchive.domain.session.flash import FlashQueue


class RequestFormat(StrEnum):
    HTML = "html"
    JSON = "json"
    JS = "js"

    @property
    def is_api(self) -> bool:
        return self is not RequestFormat.HTML


@dataclass
class RequestContext:
    """The identities, session and cookies of one request."""

    user: User | None = None
    admin: Admin | None = None
    path: str = "/"  # Full path including the query string
    format: RequestFormat = RequestFormat.HTML
    cookies: Mapping[str, str] = field(default_factory=dict)
    session: MutableMapping[str, Any] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)
    flash: FlashQueue = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.flash is None:
            self.flash = FlashQueue(self.session)

    @property
    def logged_in(self) -> bool:
        return self.user is not None

    @property
    def logged_in_as_admin(self) -> bool:
        return self.admin is not None

    is_admin = logged_in_as_admin

    @property
    def is_registered_user(self) -> bool:
        return self.logged_in or self.logged_in_as_admin

    @property
    def is_guest(self) -> bool:
        return not self.is_registered_user

    @property
    def identity(self) -> Identity:
        """The acting identity: the admin when one is signed in, else the user."""
        if self.admin is not None:
            return self.admin
        if self.user is not None:
            return self.user
        return Anonymous()

    def permit(self, permission: Permission | str) -> bool:
        return self.user is not None and self.user.has_permission(permission)

    def sign_out(self) -> None:
        self.user = None

    def describe(self) -> str:
        """Short identity label for log lines."""
        if self.admin is not None:
            return f"admin:{self.admin.id}"
        if self.user is not None:
            return f"user:{self.user.id}"
        return "anonymous"
