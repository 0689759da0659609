"""Marker base for domain ports (interfaces implemented by infrastructure adapters)."""

from typing import Protocol


class Port(Protocol):
    """Base for all ports. Adapters live in ficarchive.infrastructure."""
