# ============================================================================
# API SCHEMAS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - Response schemas
# PURPOSE: Pydantic models for the dashboard API envelope
# CREATED: 18 OCT 2026
# ============================================================================
"""
API Schemas

Response envelopes consumed by the dashboard. Status records are passed
through with the JSON field names defined on SystemStatus.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from core.models.config import FrontendSettings, LayoutConfig, TitlesConfig
from core.models.status import SystemStatus


class ApiResponse(BaseModel):
    """Envelope for /api/data."""
    code: int = 200
    data: Optional[List[SystemStatus]] = None
    message: str = "success"
    timestamp: int = Field(..., description="Unix seconds")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": 200,
                    "data": [{"name": "ERP_DB", "production_status": "READ WRITE"}],
                    "message": "success",
                    "timestamp": 1760745600,
                }
            ]
        }
    }


class MockApiResponse(ApiResponse):
    """Envelope for /api/mock-data, with translated titles."""
    titles: TitlesConfig


class FrontendConfigResponse(BaseModel):
    """Layout, refresh and title settings for the browser."""
    basePath: str = ""
    layout: LayoutConfig
    frontend: FrontendSettings
    titles: TitlesConfig


__all__ = [
    "ApiResponse",
    "MockApiResponse",
    "FrontendConfigResponse",
]
