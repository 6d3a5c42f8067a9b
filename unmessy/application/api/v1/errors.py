"""Centralized error transformation for API routes.

Maps Unmessy errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from unmessy.domain.shared.error import (
    DomainError,
    InfrastructureError,
    NotFoundError,
    UnmessyError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
}


def map_unmessy_error(error: UnmessyError) -> HTTPException:
    """Map an Unmessy error to an HTTPException."""
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown UnmessyError subclasses
    return HTTPException(status_code=500, detail=detail)
