# ============================================================================
# CLAUDE CONTEXT - MODELS MODULE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Model exports
# PURPOSE: Central export point for configuration and status models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Configuration models (input, read-only to the probes) and status
models (output, produced fresh on every sweep).
"""

from core.models.config import (
    DatabaseTarget,
    ServerConfig,
    LoggingConfig,
    TitlesConfig,
    LayoutConfig,
    RefreshSlot,
    FrontendSettings,
    AppConfig,
)
from core.models.status import (
    InstanceStatus,
    LoadBalancerStatus,
    SystemStatus,
    FleetSnapshot,
)

__all__ = [
    # Configuration
    "DatabaseTarget",
    "ServerConfig",
    "LoggingConfig",
    "TitlesConfig",
    "LayoutConfig",
    "RefreshSlot",
    "FrontendSettings",
    "AppConfig",
    # Status
    "InstanceStatus",
    "LoadBalancerStatus",
    "SystemStatus",
    "FleetSnapshot",
]
