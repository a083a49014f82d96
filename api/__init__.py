# ============================================================================
# API MODULE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API serving fleet snapshots to the dashboard
# CREATED: 18 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for the DR dashboard.
"""

from .routes import router, set_services
from .schemas import (
    ApiResponse,
    MockApiResponse,
    FrontendConfigResponse,
)

__all__ = [
    "router",
    "set_services",
    "ApiResponse",
    "MockApiResponse",
    "FrontendConfigResponse",
]
