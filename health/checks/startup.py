# ============================================================================
# STARTUP HEALTH CHECKS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Startup health checks
# PURPOSE: Basic process and configuration checks
# CREATED: 18 OCT 2026
# ============================================================================
"""
Startup Health Checks

- ProcessCheck: Always healthy if process is running
- ConfigCheck: Configuration snapshot loaded and lists databases
"""

import os
import platform
import sys

from core.config.store import get_config_store
from health.core import (
    HealthCheckPlugin,
    HealthCheckResult,
    HealthCheckCategory,
)
from health.registry import register_check


@register_check()
class ProcessCheck(HealthCheckPlugin):
    """
    Basic process health check.

    Always returns healthy if the check runs (proves process is alive).
    """

    name = "process"
    category = HealthCheckCategory.STARTUP
    timeout_seconds = 1.0

    async def check(self) -> HealthCheckResult:
        return HealthCheckResult.healthy(
            message="Process running",
            python_version=sys.version,
            platform=platform.platform(),
            pid=os.getpid(),
        )


@register_check()
class ConfigCheck(HealthCheckPlugin):
    """
    Configuration health check.

    Unhealthy until a configuration has been loaded. A loaded file with
    no databases is degraded: the service runs but every sweep is empty.
    """

    name = "config"
    category = HealthCheckCategory.CONFIGURATION
    timeout_seconds = 1.0

    async def check(self) -> HealthCheckResult:
        store = get_config_store()
        config = store.snapshot()
        path = str(store.path) if store.path else None

        if config is None:
            return HealthCheckResult.unhealthy(
                message="Configuration not loaded",
                path=path,
            )

        if not config.databases:
            return HealthCheckResult.degraded(
                message="No databases configured",
                path=path,
            )

        return HealthCheckResult.healthy(
            message=f"{len(config.databases)} databases configured",
            path=path,
            databases=[db.name for db in config.databases],
        )


__all__ = [
    "ProcessCheck",
    "ConfigCheck",
]
