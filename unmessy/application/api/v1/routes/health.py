"""Health check endpoint."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from unmessy.config import Config
from unmessy.domain.validation.port import ValidationRecordRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    version: str
    oracle_enabled: bool
    cache_backend: str
    database: str
    records: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health(
    config: FromDishka[Config],
    repository: FromDishka[ValidationRecordRepository],
) -> HealthResponse:
    """Service status. Reports ``degraded`` when the database cannot be read."""
    try:
        records = await repository.count()
    except Exception as e:
        logger.warning("Health check could not reach the database: %s", e)
        return HealthResponse(
            status="degraded",
            version=config.server.version,
            oracle_enabled=config.oracle.enabled,
            cache_backend=config.cache.backend,
            database="unavailable",
        )
    return HealthResponse(
        status="healthy",
        version=config.server.version,
        oracle_enabled=config.oracle.enabled,
        cache_backend=config.cache.backend,
        database="ok",
        records=records,
    )
