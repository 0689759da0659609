"""Flash messages kept in the session until the next rendered page."""

from collections.abc import MutableMapping
from typing import Any

from ficarchive.domain.shared.authorization.decision import Flash, FlashLevel

FLASH_KEY = "flash"


class FlashQueue:
    """Flash messages for the next request plus messages for this request only.

    Messages added with ``add`` survive a redirect (they live in the session);
    ``now`` messages are dropped when the request ends.
    """

    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session
        self._now: list[Flash] = []

    def add(self, flash: Flash) -> None:
        pending = list(self._session.get(FLASH_KEY, []))
        pending.append([str(flash.level), flash.message])
        self._session[FLASH_KEY] = pending

    def now(self, flash: Flash) -> None:
        self._now.append(flash)

    def error(self, message: str) -> None:
        self.add(Flash.error(message))

    def notice(self, message: str) -> None:
        self.add(Flash.notice(message))

    def pending(self) -> list[Flash]:
        stored = [
            Flash(level=FlashLevel(level), message=message)
            for level, message in self._session.get(FLASH_KEY, [])
        ]
        return stored + self._now

    def consume(self) -> list[Flash]:
        """Return every message and forget them (called when a page renders)."""
        messages = self.pending()
        self._session.pop(FLASH_KEY, None)
        self._now.clear()
        return messages

    def is_empty(self) -> bool:
        return not self._session.get(FLASH_KEY) and not self._now


def flash_search_warnings(flash: FlashQueue, result: Any) -> None:
    """Show a search backend's error or notice on the current page."""
    error = getattr(result, "error", None)
    notice = getattr(result, "notice", None)
    if error:
        flash.now(Flash.error(error))
    elif notice:
        flash.now(Flash.notice(notice))
