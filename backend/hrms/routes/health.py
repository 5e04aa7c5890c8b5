"""
HRMS Backend — Health Check Route
==================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings MongoDB and reports the result with version and uptime.

Status levels:
    - healthy:   MongoDB answered the ping (HTTP 200)
    - unhealthy: MongoDB did not answer (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from hrms import __version__
from hrms.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Check that the service can reach MongoDB.

    Uses the `ping` admin command, which touches no collection data.
    """
    database = request.app.state.database
    db_status = "connected"
    overall = "healthy"

    if not await database.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
