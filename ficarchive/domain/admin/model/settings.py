"""Site-wide settings editable by admins."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminSettings:
    """Snapshot of the current admin settings, read once per request."""

    tag_wrangling_off: bool = False
    enable_test_caching: bool = False
