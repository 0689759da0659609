"""Account lookup port."""

from abc import abstractmethod
from typing import Protocol

from ficarchive.domain.auth.model.identity import Admin, User
from ficarchive.domain.shared.port import Port


class AccountRepository(Port, Protocol):
    """User and admin accounts. Creating accounts is the identity provider's job."""

    @abstractmethod
    async def user(self, id: int) -> User | None: ...

    @abstractmethod
    async def admin(self, id: int) -> Admin | None: ...

    @abstractmethod
    async def user_by_login(self, login: str) -> User | None: ...

    @abstractmethod
    async def admin_by_login(self, login: str) -> Admin | None: ...

    @abstractmethod
    async def save_user(self, user: User) -> None: ...
