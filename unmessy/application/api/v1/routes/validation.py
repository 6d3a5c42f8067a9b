"""Email validation REST routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from unmessy.domain.validation.command import (
    ValidateBatch,
    ValidateBatchHandler,
    ValidateEmail,
    ValidateEmailHandler,
)
from unmessy.domain.validation.model import ValidationResult

router = APIRouter(prefix="/validate", tags=["Validation"], route_class=DishkaRoute)


@router.post(
    "/email",
    response_model=ValidationResult,
    description="Normalize and verify one address.",
)
async def validate_email(
    body: ValidateEmail,
    handler: FromDishka[ValidateEmailHandler],
) -> ValidationResult:
    validated = await handler.run(body)
    return validated.result


@router.post(
    "/batch",
    response_model=list[ValidationResult],
    description="Verify a bounded list of addresses; results keep the input order.",
)
async def validate_batch(
    body: ValidateBatch,
    handler: FromDishka[ValidateBatchHandler],
) -> list[ValidationResult]:
    validated = await handler.run(body)
    return validated.results
