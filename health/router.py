# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Liveness, readiness and self-check endpoints for the dashboard
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Router

These endpoints report on the dashboard process itself, never on the
monitored databases:

    GET /livez               - process answers HTTP
    GET /readyz              - config loaded and ping available
    GET /health              - every self-check, grouped by category
    GET /health/{check_name} - one self-check

Self-check status maps to 200 (healthy), 206 (degraded) or 503 (unhealthy).
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from health.core import AggregatedHealthResult, HealthStatus
from health.executor import HealthCheckExecutor
from health.registry import HealthCheckRegistry, get_registry
from __version__ import __version__, BUILD_DATE

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Health"])

_HTTP_CODES = {
    HealthStatus.HEALTHY: 200,
    HealthStatus.DEGRADED: 206,
    HealthStatus.UNHEALTHY: 503,
}


def _respond(status: HealthStatus, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=_HTTP_CODES[status], content=body)


def _by_category(registry: HealthCheckRegistry, result: AggregatedHealthResult) -> Dict[str, Dict[str, int]]:
    """Count check outcomes per category, e.g. {"process": {"healthy": 2, ...}}."""
    counts: Dict[str, Dict[str, int]] = {}
    for name, outcome in result.checks.items():
        check = registry.get(name)
        if check is None:
            continue
        bucket = counts.setdefault(
            check.category.value, {s.value: 0 for s in HealthStatus}
        )
        bucket[outcome.status.value] += 1
    return counts


@health_router.get("/livez")
async def liveness_probe():
    """Runs no checks; answering at all is the signal."""
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


@health_router.get("/readyz")
async def readiness_probe():
    """
    Run the checks marked required_for_ready.

    Any unhealthy one turns the answer into 503 naming just the failures.
    Degraded required checks still count as ready.
    """
    registry = get_registry()
    result = await HealthCheckExecutor(registry).execute_required()
    elapsed = round(result.total_duration_ms, 2)

    if result.status != HealthStatus.UNHEALTHY:
        return {"status": "ready", "checks_passed": len(result.checks), "total_duration_ms": elapsed}

    failing = {
        name: outcome.to_dict()
        for name, outcome in result.checks.items()
        if outcome.status == HealthStatus.UNHEALTHY
    }
    logger.warning(f"Not ready: {', '.join(sorted(failing))}")
    return _respond(
        HealthStatus.UNHEALTHY,
        {"status": "not_ready", "checks": failing, "total_duration_ms": elapsed},
    )


@health_router.get("/health")
async def full_health_check():
    """Run every registered self-check and add a per-category tally."""
    registry = get_registry()
    result = await HealthCheckExecutor(registry).execute_all()

    body = result.to_dict()
    body.update(
        version=__version__,
        build_date=BUILD_DATE,
        summary=_by_category(registry, result),
    )
    return _respond(result.status, body)


@health_router.get("/health/{check_name}")
async def single_health_check(check_name: str):
    outcome = await HealthCheckExecutor(get_registry()).execute_single(check_name)
    if outcome is None:
        return JSONResponse(
            status_code=404,
            content={"error": f"Health check not found: {check_name}"},
        )
    return _respond(outcome.status, outcome.to_dict())


__all__ = [
    "health_router",
]
