"""Custom Dishka scopes for the archive."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (config, cache, translator, repositories)
    - UOW: Unit of Work, one per HTTP request (request context, guards)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
