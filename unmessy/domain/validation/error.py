"""Pipeline error taxonomy.

Only OracleError subclasses are raised across a boundary (adapter -> oracle
client); the client turns them into results. The others name failure modes
that the pipeline represents in a ValidationResult or in its step trail.
"""

from unmessy.domain.shared.error import (
    DomainError,
    ExternalServiceError,
    StorageUnavailableError,
)


class FormatError(DomainError):
    """Address fails the structural grammar. Terminal, no recheck."""


class DomainDenylisted(DomainError):
    """Address domain is known bad. Terminal, no recheck."""


class OracleError(ExternalServiceError):
    """Base for oracle call failures."""

    transient: bool = False


class OracleTimeout(OracleError):
    """Oracle did not answer within the attempt budget."""

    transient = True


class OracleTransportError(OracleError):
    """Connection failure or 5xx/429 from the oracle."""

    transient = True


class OracleResponseError(OracleError):
    """Oracle answered with something we cannot use (4xx, bad payload)."""


class CacheUnavailable(StorageUnavailableError):
    """Known-good cache timed out or failed. Always absorbed."""


class PersistenceFailure(StorageUnavailableError):
    """Writing a verdict failed. Logged in the step trail, never escalated."""
