# ============================================================================
# DEPENDENCY HEALTH CHECKS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Probe dependency checks
# PURPOSE: Verify the tools the probes rely on are present
# CREATED: 18 OCT 2026
# ============================================================================
"""
Dependency Health Checks

- PingBinaryCheck: the reachability probe shells out to the system ping
- OracleDriverCheck: the database probes need python-oracledb
"""

import shutil

from health.core import (
    HealthCheckPlugin,
    HealthCheckResult,
    HealthCheckCategory,
)
from health.registry import register_check


@register_check(required_for_ready=False)
class PingBinaryCheck(HealthCheckPlugin):
    """Unhealthy when no ping command is on PATH (every host would read offline)."""

    name = "ping_binary"
    category = HealthCheckCategory.DEPENDENCY
    timeout_seconds = 1.0

    async def check(self) -> HealthCheckResult:
        path = shutil.which("ping")
        if path is None:
            return HealthCheckResult.unhealthy(message="ping command not found on PATH")
        return HealthCheckResult.healthy(message="ping available", path=path)


@register_check(required_for_ready=False)
class OracleDriverCheck(HealthCheckPlugin):
    """Reports the python-oracledb version in use."""

    name = "oracle_driver"
    category = HealthCheckCategory.DEPENDENCY
    timeout_seconds = 1.0

    async def check(self) -> HealthCheckResult:
        try:
            import oracledb
        except ImportError as e:
            return HealthCheckResult.unhealthy(
                message=f"python-oracledb not importable: {e}",
            )

        return HealthCheckResult.healthy(
            message="python-oracledb available",
            version=oracledb.__version__,
            thin_mode=oracledb.is_thin_mode(),
        )


__all__ = [
    "PingBinaryCheck",
    "OracleDriverCheck",
]
