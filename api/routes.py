# ============================================================================
# API ROUTES
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - FastAPI route definitions
# PURPOSE: HTTP endpoints for fleet status and dashboard settings
# CREATED: 18 OCT 2026
# ============================================================================
"""
API Routes

Endpoints (mounted under /api):
    GET /data        Fresh fleet snapshot (probes every database)
    GET /config      Layout, refresh intervals and titles for the browser
    GET /mock-data   Generated demo fleet (only with ENABLE_MOCK_DATA=true)

Every request to /data runs a new sweep; nothing is cached.
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from core.config.store import ConfigStore
from services.evaluator import FleetEvaluator
from services.mock_data import generate_mock_snapshot, mock_titles
from .schemas import ApiResponse, MockApiResponse, FrontendConfigResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
# These will be set by the main app at startup

_fleet_evaluator: Optional[FleetEvaluator] = None
_config_store: Optional[ConfigStore] = None
_mock_enabled = False


def set_services(fleet_evaluator, config_store, mock_enabled: bool = False):
    """Set service instances for dependency injection."""
    global _fleet_evaluator, _config_store, _mock_enabled
    _fleet_evaluator = fleet_evaluator
    _config_store = config_store
    _mock_enabled = mock_enabled


def get_fleet_evaluator() -> FleetEvaluator:
    if _fleet_evaluator is None:
        raise HTTPException(500, "Services not initialized")
    return _fleet_evaluator


def get_config_store() -> ConfigStore:
    if _config_store is None:
        raise HTTPException(500, "Services not initialized")
    return _config_store


# ============================================================================
# FLEET STATUS
# ============================================================================

@router.get("/data", response_model=ApiResponse, tags=["Status"])
async def get_fleet_status():
    """
    Probe every configured database and return the snapshot.

    One configuration snapshot is taken for the whole sweep; a reload
    during the sweep applies to the next request.
    """
    evaluator = get_fleet_evaluator()
    config = get_config_store().snapshot()

    if config is None:
        return JSONResponse(
            status_code=503,
            content=ApiResponse(
                code=503,
                data=[],
                message="configuration not loaded",
                timestamp=int(time.time()),
            ).model_dump(),
        )

    statuses = await evaluator.evaluate(config)
    return ApiResponse(
        code=200,
        data=statuses,
        message="success",
        timestamp=int(time.time()),
    )


# ============================================================================
# DASHBOARD SETTINGS
# ============================================================================

@router.get("/config", response_model=FrontendConfigResponse, tags=["Dashboard"])
async def get_frontend_config():
    """Settings the browser needs to lay out and refresh the dashboard."""
    config = get_config_store().snapshot()
    if config is None:
        raise HTTPException(503, "Configuration not loaded")

    return FrontendConfigResponse(
        basePath=config.server.public_base_path,
        layout=config.layout,
        frontend=config.frontend,
        titles=config.titles,
    )


# ============================================================================
# MOCK DATA
# ============================================================================

@router.get("/mock-data", response_model=MockApiResponse, tags=["Dashboard"])
async def get_mock_data(lang: str = Query("en", max_length=8)):
    """Generated twelve-database fleet for screenshots and UI work."""
    if not _mock_enabled:
        raise HTTPException(404, "Mock data disabled")

    return MockApiResponse(
        code=200,
        data=generate_mock_snapshot(lang),
        titles=mock_titles(lang),
        message="Mock data generated successfully",
        timestamp=int(time.time()),
    )


__all__ = [
    "router",
    "set_services",
]
