"""Value objects for the auth domain."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from pydantic import RootModel


class UserId(RootModel[int]):
    """Unique identifier for a User."""

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(("user", self.root))


class AdminId(RootModel[int]):
    """Unique identifier for an Admin. Admin and user id spaces are separate."""

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(("admin", self.root))


class Permission(StrEnum):
    """Named user permissions checked with ``permit``."""

    TAG_WRANGLER = "tag_wrangler"
    OPENDOORS = "opendoors"
    ARCHIVIST = "archivist"


class SuspensionStatus(StrEnum):
    NONE = "none"
    SUSPENDED = "suspended"
    BANNED = "banned"


@dataclass(frozen=True)
class Suspension:
    """Restriction state of a user account.

    A ban is permanent and wins over a temporary suspension.
    """

    suspended_until: datetime | date | None = None
    banned: bool = False

    @property
    def status(self) -> SuspensionStatus:
        if self.banned:
            return SuspensionStatus.BANNED
        if self.suspended_until is not None:
            return SuspensionStatus.SUSPENDED
        return SuspensionStatus.NONE

    @classmethod
    def until(cls, suspended_until: datetime | date) -> "Suspension":
        return cls(suspended_until=suspended_until)

    @classmethod
    def ban(cls) -> "Suspension":
        return cls(banned=True)


@dataclass(frozen=True)
class Preference:
    """User display preferences relevant to request handling."""

    adult: bool = False  # Show adult content without the interstitial
    work_title_format: str | None = None  # e.g. "TITLE - AUTHOR - FANDOM"
    time_zone: str | None = None  # IANA zone name used when rendering instants
