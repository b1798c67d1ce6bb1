"""
Registry API — Health Check Route
===================================

What:  GET /health for load balancers and container health checks.
How:   Leases a connection and runs SELECT 1. The service is "healthy" only
       when the store answers; the endpoint itself always returns 200 so
       callers read the status field.
"""

import logging
import time

from fastapi import APIRouter, Depends

from app import __version__
from app.database import ConnectionProvider
from app.dependencies import get_connection_provider
from app.exceptions import StoreUnavailableError
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with provider.acquire() as conn:
            await conn.ping()
    except StoreUnavailableError:
        db_status = "disconnected"
        overall = "unhealthy"
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
