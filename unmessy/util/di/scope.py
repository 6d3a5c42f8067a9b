"""Custom Dishka scopes for Unmessy."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Unmessy dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, HTTP client, pipeline services)
    - UOW: Unit of Work (one HTTP request, one command handler run)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
