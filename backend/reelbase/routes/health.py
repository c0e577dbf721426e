"""
Reelbase Backend — Health Check Route
=======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the document store and reports connectivity plus uptime.
Who:   Docker health checks, load balancers, monitoring.

Status levels:
    - healthy:   store answered the ping
    - unhealthy: store unreachable (HTTP 200 still, the body says why)
"""

import logging
import time

from fastapi import APIRouter, Depends

from reelbase import __version__
from reelbase.dependencies import get_store
from reelbase.exceptions import StoreError
from reelbase.schemas.common import HealthResponse
from reelbase.store.base import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: DocumentStore = Depends(get_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except StoreError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: document store unreachable: %s", e.detail)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        store_backend=store.backend_name,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
