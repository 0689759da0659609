"""Ports for admin-managed site state."""

from abc import abstractmethod
from typing import Protocol

from ficarchive.domain.admin.model.banner import AdminBanner
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.shared.port import Port


class AdminSettingsRepository(Port, Protocol):
    @abstractmethod
    async def current(self) -> AdminSettings:
        """Return the current settings row."""
        ...

    @abstractmethod
    async def save(self, settings: AdminSettings) -> None: ...


class BannerRepository(Port, Protocol):
    @abstractmethod
    async def next_id(self) -> int: ...

    @abstractmethod
    async def latest_active(self) -> AdminBanner | None:
        """Return the most recently created active banner, if any."""
        ...

    @abstractmethod
    async def save(self, banner: AdminBanner) -> None: ...
