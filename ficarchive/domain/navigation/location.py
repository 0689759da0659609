"""Return-to location memory kept in the cookie-backed session."""

import logging
from collections.abc import MutableMapping
from typing import Any

from ficarchive.domain.auth.model.identity import Admin, Identity, User

logger = logging.getLogger(__name__)

RETURN_TO_KEY = "return_to"
REDIRECTED = "redirected"  # Set after a redirect back so the next request clears it

DEFAULT_MAX_LENGTH = 200


class LocationMemory:
    """Remembers the last page visited so a redirect can return to it.

    A redirect back leaves the REDIRECTED marker behind; the next ``store``
    consumes the marker instead of recording a path, which keeps the
    redirected-to page from becoming its own return target.
    """

    def __init__(
        self,
        session: MutableMapping[str, Any],
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self._session = session
        self._max_length = max_length

    @property
    def stored(self) -> str | None:
        value = self._session.get(RETURN_TO_KEY)
        if value == REDIRECTED:
            return None
        return value

    def store(self, fullpath: str) -> None:
        if self._session.get(RETURN_TO_KEY) == REDIRECTED:
            self._session.pop(RETURN_TO_KEY, None)
        elif len(fullpath) > self._max_length:
            # Session cookies are size limited; drop the old path too
            logger.debug("Not storing return path of length %d", len(fullpath))
            self._session.pop(RETURN_TO_KEY, None)
        else:
            self._session[RETURN_TO_KEY] = fullpath

    def consume(self) -> str | None:
        """Take the stored path, leaving nothing behind."""
        back = self.stored
        self._session.pop(RETURN_TO_KEY, None)
        return back

    def redirect_back_or_default(self, default: str) -> str:
        """Return the stored path (marking the redirect) or default."""
        back = self.consume()
        if back:
            self._session[RETURN_TO_KEY] = REDIRECTED
            return back
        return default


def after_sign_in_path(
    identity: Identity,
    memory: LocationMemory,
    *,
    admins_path: str,
    user_path: str,
) -> str:
    """Where to land after signing in.

    Admins go to the admin dashboard; users go back where they were, or to
    their own page (user_path) when nothing was remembered.
    """
    if isinstance(identity, Admin):
        return admins_path
    if isinstance(identity, User):
        return memory.consume() or user_path
    return memory.consume() or "/"
