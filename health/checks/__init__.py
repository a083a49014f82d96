# ============================================================================
# HEALTH CHECK PLUGINS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Health check implementations
# PURPOSE: Self-checks for the dashboard process
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Plugins

Startup Checks (priority 10):
- process: Basic process health (always healthy if running)

Configuration Checks (priority 20):
- config: Configuration snapshot loaded with databases

Dependency Checks (priority 30):
- ping_binary: System ping command available
- oracle_driver: python-oracledb importable

Import this module to register all checks:
    import health.checks
"""

from health.checks.startup import ProcessCheck, ConfigCheck
from health.checks.dependencies import PingBinaryCheck, OracleDriverCheck

__all__ = [
    "ProcessCheck",
    "ConfigCheck",
    "PingBinaryCheck",
    "OracleDriverCheck",
]
