"""Suspension window lookups."""

import sys
from datetime import date, datetime

from ficarchive.cli.console import get_console
from ficarchive.config import Config
from ficarchive.domain.auth.service.suspension import SuspensionWindow


def _parse_end(value: str) -> date | datetime:
    """Accept a date (2024-03-10) or an ISO timestamp (2024-03-10T19:00:00+00:00)."""
    if "T" in value or " " in value:
        return datetime.fromisoformat(value)
    return date.fromisoformat(value)


def unban_time(suspended_until: str, *, time_zone: str | None = None) -> None:
    """Show when a suspension stored as SUSPENDED_UNTIL is lifted.

    Args:
        suspended_until: Stored suspension end, a date or ISO timestamp.
        time_zone: IANA zone to render the instant in. Defaults to the
            configured display zone.
    """
    console = get_console()
    try:
        end = _parse_end(suspended_until)
    except ValueError:
        console.error(
            f"Not a date or timestamp: {suspended_until}",
            hint="Use YYYY-MM-DD or an ISO 8601 timestamp",
        )
        sys.exit(1)

    display = Config().display  # type: ignore[call-arg]
    window = SuspensionWindow.for_end(end)
    console.key_values(
        [
            ("Stored end", str(window.suspended_until)),
            ("Unban (UTC)", window.unban_at.isoformat()),
            (
                "Unban (local)",
                window.display(time_zone or display.default_time_zone, display.time_format),
            ),
        ],
        title="Suspension window",
    )
