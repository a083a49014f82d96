# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Parallel health check execution
# PURPOSE: Execute health checks with timeouts and aggregation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Executor

Runs every selected check concurrently, each under its own timeout,
and aggregates with 'worst wins'. A check that raises or times out is
reported unhealthy; the executor itself never raises.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional

from health.core import (
    AggregatedHealthResult,
    HealthCheckPlugin,
    HealthCheckResult,
    HealthStatus,
)
from health.registry import HealthCheckRegistry, get_registry

logger = logging.getLogger(__name__)


class HealthCheckExecutor:
    """Executes health checks in parallel with per-check timeouts."""

    def __init__(self, registry: Optional[HealthCheckRegistry] = None):
        self.registry = registry if registry is not None else get_registry()

    async def execute_all(self) -> AggregatedHealthResult:
        """Execute all registered health checks."""
        return await self._execute_many(self.registry.checks())

    async def execute_required(self) -> AggregatedHealthResult:
        """Execute only checks required for /readyz."""
        return await self._execute_many(self.registry.checks(required_only=True))

    async def execute_single(self, name: str) -> Optional[HealthCheckResult]:
        """Execute a single check by name."""
        check = self.registry.get(name)
        if check is None:
            return None
        return await self._execute_check(check)

    async def _execute_many(self, checks: List[HealthCheckPlugin]) -> AggregatedHealthResult:
        start_time = time.monotonic()

        results = await asyncio.gather(*(self._execute_check(c) for c in checks))
        by_name: Dict[str, HealthCheckResult] = {
            check.name: result for check, result in zip(checks, results)
        }

        return AggregatedHealthResult(
            status=HealthStatus.aggregate([r.status for r in results]),
            checks=by_name,
            total_duration_ms=(time.monotonic() - start_time) * 1000,
        )

    async def _execute_check(self, check: HealthCheckPlugin) -> HealthCheckResult:
        """Execute a single check with timeout."""
        start_time = time.monotonic()

        try:
            result = await asyncio.wait_for(check.check(), timeout=check.timeout_seconds)
            logger.debug(f"Health check {check.name}: {result.status.value}")
        except asyncio.TimeoutError:
            logger.warning(
                f"Health check {check.name} timed out after {check.timeout_seconds}s"
            )
            result = HealthCheckResult.unhealthy(f"Timeout after {check.timeout_seconds}s")
        except Exception as e:
            logger.error(f"Health check {check.name} failed: {e}")
            result = HealthCheckResult.from_exception(e)

        result.duration_ms = (time.monotonic() - start_time) * 1000
        return result


__all__ = [
    "HealthCheckExecutor",
]
