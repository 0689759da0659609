"""Cookies the reverse proxy reads to decide whether a page may be cached.

The proxy serves cached anonymous pages only when none of the signal cookies
are present, so they must track the real session state exactly. Every
function here is pure: it returns the mutations and the web layer applies
them to the response.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

FLASH_IS_SET = "flash_is_set"
ADMIN_CREDENTIALS = "admin_credentials"
USER_CREDENTIALS = "user_credentials"
VIEW_ADULT = "view_adult"

ONE_YEAR = 365 * 24 * 60 * 60


@dataclass(frozen=True)
class CookieMutation:
    """Set (value given) or delete (value None) one cookie."""

    name: str
    value: str | None = None
    max_age: int | None = None

    @property
    def is_delete(self) -> bool:
        return self.value is None

    @classmethod
    def set(cls, name: str, value: str = "1", max_age: int | None = None) -> "CookieMutation":
        return cls(name=name, value=value, max_age=max_age)

    @classmethod
    def delete(cls, name: str) -> "CookieMutation":
        return cls(name=name)


def clear_flash_signal(cookies: Mapping[str, str]) -> list[CookieMutation]:
    """Start of request: forget the previous request's flash marker."""
    return [CookieMutation.delete(FLASH_IS_SET)] if FLASH_IS_SET in cookies else []


def flash_signal(flash_pending: bool) -> list[CookieMutation]:
    """End of request (redirects included): mark that a flash is waiting."""
    return [CookieMutation.set(FLASH_IS_SET)] if flash_pending else []


def _credential_signal(
    name: str, active: bool, cookies: Mapping[str, str], max_age: int
) -> list[CookieMutation]:
    present = name in cookies
    if active and not present:
        return [CookieMutation.set(name, max_age=max_age)]
    if not active and present:
        return [CookieMutation.delete(name)]
    return []


def credential_signals(
    *,
    user_logged_in: bool,
    admin_logged_in: bool,
    cookies: Mapping[str, str],
    max_age: int = ONE_YEAR,
) -> list[CookieMutation]:
    """End of request: keep admin_credentials and user_credentials in sync.

    user_credentials follows "anyone is signed in", admin_credentials follows
    "an admin is signed in". Existing cookies are left alone.
    """
    return [
        *_credential_signal(ADMIN_CREDENTIALS, admin_logged_in, cookies, max_age),
        *_credential_signal(
            USER_CREDENTIALS, user_logged_in or admin_logged_in, cookies, max_age
        ),
    ]


def is_sessions_path(path: str, sessions_paths: Iterable[str]) -> bool:
    """Whether path, query string aside, is one of the sign-in/sign-out endpoints."""
    bare = path.partition("?")[0]
    return bare in set(sessions_paths)


def is_lost_session(
    *,
    user_logged_in: bool,
    cookies: Mapping[str, str],
    path: str,
    sessions_paths: Iterable[str],
) -> bool:
    """The session claims a user but the proxy was never told (cookie missing).

    The sign-in/sign-out endpoints are exempt so the cookie can be issued.
    """
    if not user_logged_in or USER_CREDENTIALS in cookies:
        return False
    return not is_sessions_path(path, sessions_paths)


def merge(mutations: Iterable[CookieMutation]) -> list[CookieMutation]:
    """Collapse mutations so only the last one per cookie name is applied."""
    merged: dict[str, CookieMutation] = {}
    for mutation in mutations:
        merged.pop(mutation.name, None)
        merged[mutation.name] = mutation
    return list(merged.values())
