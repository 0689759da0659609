"""Error hierarchy for the archive.

Error layers:
- ArchiveError: Base class for all archive errors
- DomainError: Business rule violations, access refusals, validation failures (4xx responses)
- InfrastructureError: System-level failures like a missing search index (5xx responses)

These errors are mapped to HTTP responses by the global exception handlers in app.py.
"""


class ArchiveError(Exception):
    """Base class for all archive errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(ArchiveError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class UnknownFormatError(DomainError):
    """Requested response format is not served by this endpoint."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class AuthorizationError(DomainError):
    """A policy object refused the current admin or user."""


class AuthenticationExpiredError(DomainError):
    """The request's authenticity token is stale or missing."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 5xx)
# =============================================================================


class InfrastructureError(ArchiveError):
    """Base class for infrastructure/system errors."""


class UpstreamUnavailableError(InfrastructureError):
    """The search index cannot be reached."""


class RequestTimeoutError(InfrastructureError):
    """The surrounding request timeout fired while handling the request."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
