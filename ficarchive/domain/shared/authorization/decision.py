"""Guard results.

Every guard returns Allow or Deny. Allow is truthy and Deny is falsy, so guards
compose with ``or`` the way filter methods do::

    policy.users_only(ctx) or policy.access_denied(ctx)

The policy engine never performs the redirect itself; the web layer applies a
Deny (flash, location memory, redirect or error payload).
"""

from dataclasses import dataclass
from enum import StrEnum

from ficarchive.domain.shared.error import DomainError


class FlashLevel(StrEnum):
    ERROR = "error"
    NOTICE = "notice"


@dataclass(frozen=True)
class Flash:
    """A message shown to the requester on the next rendered page."""

    level: FlashLevel
    message: str

    @classmethod
    def error(cls, message: str) -> "Flash":
        return cls(level=FlashLevel.ERROR, message=message)

    @classmethod
    def notice(cls, message: str) -> "Flash":
        return cls(level=FlashLevel.NOTICE, message=message)


@dataclass(frozen=True)
class Allow:
    """The current identity may proceed."""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Deny:
    """The current identity may not proceed; send it elsewhere.

    Attributes:
        redirect_to: Where HTML (and JS) requests are sent.
        guard: Name of the guard that refused, for audit logs.
        flash: Message queued for the next page, if any.
        store_location: Remember the current path so sign-in can return to it.
        sign_out: Drop the session identity before redirecting.
        status_code: Status used for JSON responses.
        api_message: JSON error text when it differs from the flash text.
    """

    redirect_to: str
    guard: str = "access_denied"
    flash: Flash | None = None
    store_location: bool = False
    sign_out: bool = False
    status_code: int = 403
    api_message: str | None = None

    def __bool__(self) -> bool:
        return False

    @property
    def errors(self) -> list[str]:
        if self.api_message:
            return [self.api_message]
        if self.flash is not None:
            return [self.flash.message]
        return []


Decision = Allow | Deny

ALLOW = Allow()


class AccessDenied(DomainError):
    """Raised by the web layer to short-circuit a handler with a Deny."""

    def __init__(self, decision: Deny) -> None:
        super().__init__(f"Access denied by {decision.guard}", code="access_denied")
        self.decision = decision
