# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Expose the dependency health report over HTTP
# ============================================================================
"""
Health Check Router

FastAPI router for the dependency health report.

Endpoints:
    GET  /livez       - Liveness probe (is the process alive?)
                        Instant, runs no dependency checks.

    GET  /api/health  - Full dependency report
                        Runs every configured check concurrently.
                        Polled by the dashboard every 30 seconds.

    POST /api/health  - Same as GET when the body names no service.
                        Single-service checks return 501.

Response Codes:
    200 - Healthy
    400 - Malformed POST body
    501 - Single-service check requested
    503 - Unhealthy (at least one check failed)
    500 - The health system itself failed
"""

import uuid

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from __version__ import __version__, BUILD_DATE
from core.config import HealthSettings, get_settings
from core.logging import get_logger, log_context, ComponentType
from health.core import format_timestamp, utcnow
from health.executor import HealthCheckExecutor
from health.registry import ProbeRegistry, get_default_registry
from health.schemas import (
    HealthCheckRequest,
    HealthErrorModel,
    HealthReportModel,
    NotImplementedModel,
)

logger = get_logger(__name__, ComponentType.API)

health_router = APIRouter(tags=["Health"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

REPORT_RESPONSES = {
    200: {"model": HealthReportModel, "description": "All checks passed"},
    503: {"model": HealthReportModel, "description": "At least one check failed"},
    500: {"model": HealthErrorModel, "description": "Health check system failure"},
}


def _error_response(status_code: int, message: str, e: Exception) -> JSONResponse:
    body = HealthErrorModel(
        message=message,
        error=str(e) or type(e).__name__,
        timestamp=format_timestamp(utcnow()),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers=NO_CACHE_HEADERS,
    )


async def _report_response(
    settings: HealthSettings,
    registry: ProbeRegistry,
) -> JSONResponse:
    """Run the checks and render the report, or a top-level error."""
    with log_context(request_id=uuid.uuid4().hex[:12], operation="health_report"):
        try:
            executor = HealthCheckExecutor(settings=settings, registry=registry)
            report = await executor.run_report()
        except Exception as e:
            logger.exception(f"Health check system failure: {e}")
            return _error_response(500, "Health check system failure", e)

    return JSONResponse(
        status_code=report.http_status,
        content=report.to_dict(),
        headers=NO_CACHE_HEADERS,
    )


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@health_router.get("/livez")
async def liveness_probe():
    """
    Liveness probe.

    Returns 200 if the process is alive. No external checks.
    """
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


# ============================================================================
# FULL HEALTH REPORT
# ============================================================================

@health_router.get("/api/health", responses=REPORT_RESPONSES)
async def health_report(
    settings: HealthSettings = Depends(get_settings),
    registry: ProbeRegistry = Depends(get_default_registry),
):
    """
    Dependency health report.

    Runs every configured check and returns per-check results with
    an overall status and pass/fail summary. Unconfigured checks are
    left out of the report.

    Returns:
        200: All checks succeeded
        503: At least one check failed
        500: The report could not be produced
    """
    return await _report_response(settings, registry)


@health_router.post(
    "/api/health",
    responses={
        **REPORT_RESPONSES,
        400: {"model": HealthErrorModel, "description": "Invalid request"},
        501: {"model": NotImplementedModel, "description": "Single-service check"},
    },
)
async def health_report_post(
    request: Request,
    settings: HealthSettings = Depends(get_settings),
    registry: ProbeRegistry = Depends(get_default_registry),
):
    """
    Dependency health report (POST variant).

    Body: {"service": "<name>"} is accepted but single-service checks
    are not implemented (501). An empty body or one without "service"
    behaves like GET.
    """
    raw = await request.body()
    try:
        payload = (
            HealthCheckRequest.model_validate_json(raw)
            if raw.strip()
            else HealthCheckRequest()
        )
    except ValidationError as e:
        logger.warning(f"Invalid health check request: {e.error_count()} error(s)")
        return _error_response(400, "Invalid request", e)

    if payload.service:
        body = NotImplementedModel(
            message=(
                "Individual service checks not implemented yet. "
                "Use GET /api/health for all checks."
            ),
            requestedService=payload.service,
        )
        return JSONResponse(status_code=501, content=body.model_dump())

    return await _report_response(settings, registry)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "health_router",
    "NO_CACHE_HEADERS",
]
