"""
Health check router.

Liveness and readiness in one endpoint: the service answers, and the
database is probed with a trivial query.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from fleet.core.config import settings
from fleet.interfaces.vessel.dependencies import get_engine
from fleet.interfaces.vessel.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns service status, version and database reachability.",
)
def health_check(engine: Engine = Depends(get_engine)) -> HealthResponse:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Health check: database unreachable: %s", exc)
        return HealthResponse(
            status="degraded", version=settings.version, database="unreachable"
        )
    return HealthResponse(status="ok", version=settings.version, database="ok")
