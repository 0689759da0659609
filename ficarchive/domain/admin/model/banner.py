"""Admin banner shown across the top of every page."""

from dataclasses import dataclass
from enum import StrEnum


class BannerType(StrEnum):
    DEFAULT = ""
    ALERT = "alert"
    EVENT = "event"


@dataclass(frozen=True)
class AdminBanner:
    id: int
    content: str
    banner_type: BannerType = BannerType.DEFAULT
    active: bool = True
