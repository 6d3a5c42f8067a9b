"""Error hierarchy for Unmessy.

Error layers:
- UnmessyError: Base class for all Unmessy errors
- DomainError: Business rule violations, malformed requests (4xx responses)
- InfrastructureError: System-level failures like storage/network issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class UnmessyError(Exception):
    """Base class for all Unmessy errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(UnmessyError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(UnmessyError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database, cache) is unavailable."""


class ExternalServiceError(InfrastructureError):
    """External service (verification oracle) is unavailable or failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
