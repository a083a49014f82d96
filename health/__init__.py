# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Health check plugin system
# PURPOSE: Self-checks of the dashboard service
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Module

Plugin-based self-checks of the dashboard process:
- /livez: Process alive (instant)
- /readyz: Required checks pass (configuration loaded)
- /health: All plugins

Usage:
    from health import health_router

    import health.checks  # Register built-in checks
    app.include_router(health_router)
"""

from health.core import (
    HealthStatus,
    HealthCheckResult,
    HealthCheckPlugin,
    HealthCheckCategory,
    AggregatedHealthResult,
)
from health.registry import (
    HealthCheckRegistry,
    register_check,
    get_registry,
)
from health.executor import HealthCheckExecutor
from health.router import health_router

__all__ = [
    # Core types
    "HealthStatus",
    "HealthCheckResult",
    "HealthCheckPlugin",
    "HealthCheckCategory",
    "AggregatedHealthResult",
    # Registry
    "HealthCheckRegistry",
    "register_check",
    "get_registry",
    # Executor
    "HealthCheckExecutor",
    # Router
    "health_router",
]
