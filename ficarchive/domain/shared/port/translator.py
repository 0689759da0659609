"""Translation port."""

from abc import abstractmethod
from typing import Any, Protocol

from ficarchive.domain.shared.port import Port


class Translator(Port, Protocol):
    """Looks up user-facing strings by dotted key.

    Parameters are interpolated into ``%{name}`` placeholders.
    """

    @abstractmethod
    def translate(self, key: str, default: str | None = None, **params: Any) -> str:
        """Return the message for key, or default (interpolated) when the key is missing."""
        ...
