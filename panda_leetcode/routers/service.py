"""Operational endpoints: liveness with directory cache state, and Prometheus exposition."""

import time

from fastapi import APIRouter, Depends
from starlette.responses import Response

from panda_leetcode.routers.dependencies import get_directory
from panda_leetcode.telemetry.metrics import get_metrics
from panda_leetcode.telemetry.tracing import SERVICE_VERSION
from panda_leetcode.upstream.directory import CompanyDirectory

router = APIRouter(tags=["service"])

_started = time.monotonic()


@router.get("/health")
async def health(directory: CompanyDirectory = Depends(get_directory)):
    # Reports the cache as-is; a health check must not hit GitHub's rate limit.
    return {
        "status": "healthy",
        "version": SERVICE_VERSION,
        "uptime_seconds": round(time.monotonic() - _started, 2),
        "directory": directory.cache_status(),
    }


@router.get("/metrics", include_in_schema=False)
async def metrics():
    body, content_type = get_metrics()
    return Response(content=body, media_type=content_type)
