"""Port for the per-user counts shown in the user menu."""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol

from ficarchive.domain.auth.model.value import UserId
from ficarchive.domain.shared.port import Port


@dataclass(frozen=True)
class UserMenuCounts:
    subscriptions: int = 0
    visible_works: int = 0
    bookmarks: int = 0
    owned_collections: int = 0
    challenge_signups: int = 0
    offer_assignments: int = 0  # Undefaulted offer plus pinch-hit assignments
    unposted_works: int = 0


class UserStatsReader(Port, Protocol):
    @abstractmethod
    async def menu_counts(self, user_id: UserId) -> UserMenuCounts:
        """Count everything shown in the user menu (expensive; cache the result)."""
        ...
