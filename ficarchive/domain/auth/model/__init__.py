"""Auth domain models."""

from .identity import Admin, Anonymous, Identity, User
from .value import AdminId, Permission, Preference, Suspension, SuspensionStatus, UserId

__all__ = [
    "Admin",
    "AdminId",
    "Anonymous",
    "Identity",
    "Permission",
    "Preference",
    "Suspension",
    "SuspensionStatus",
    "User",
    "UserId",
]
