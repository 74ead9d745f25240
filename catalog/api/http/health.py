"""Liveness endpoint reporting database reachability."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from catalog.logging import logger
from catalog.storage.db import engine

router = APIRouter(tags=["health"])

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    status: str
    database: str


async def _database_status() -> str:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, TimeoutError) as ex:
        logger.error(f"Database health check failed: {ex}")
        return UNHEALTHY
    return HEALTHY


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(response: Response) -> HealthResponse:
    """
    Report whether the service can reach its database.

    Answers 200 when `SELECT 1` succeeds and 503 otherwise; the body has
    the same shape in both cases.
    """
    database = await _database_status()
    if database != HEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(status=database, database=database)
