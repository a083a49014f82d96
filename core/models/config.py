# ============================================================================
# CLAUDE CONTEXT - CONFIGURATION MODELS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core model - Dashboard configuration file
# PURPOSE: Validate config.yaml into immutable, typed snapshots
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: DatabaseTarget, AppConfig and section models
# DEPENDENCIES: pydantic
# ============================================================================
"""
Configuration Models

One AppConfig instance is one configuration snapshot. Every model is
frozen: a snapshot handed to a running sweep can never change under it,
a reload builds a brand new AppConfig and swaps the reference.

Example config.yaml:

    server:
      port: "8080"
      refresh_interval: 30
    databases:
      - name: ERP_DB
        lb_ip: 172.16.10.100
        prod_ip: 10.10.1.10
        dr_ip: 10.20.1.10
        port: 1521
        service_name: ERPDB
        username: monitor
        password: secret
"""

from typing import List

from pydantic import BaseModel, Field, field_validator


DEFAULT_REFRESH_INTERVAL = 30
DEFAULT_FRONTEND_INTERVAL_MS = 600000


class DatabaseTarget(BaseModel):
    """
    One Data Guard pair to monitor.

    Addresses are reached on the same listener port and service name.
    """
    model_config = {"frozen": True}

    name: str = Field(..., min_length=1, description="Display name")
    lb_ip: str = Field(default="", description="Load balancer address")
    prod_ip: str = Field(default="", description="Production instance address")
    dr_ip: str = Field(default="", description="Disaster recovery instance address")
    port: int = Field(default=1521, ge=1, le=65535)
    service_name: str = Field(default="")
    username: str = Field(default="")
    password: str = Field(default="", repr=False)


class ServerConfig(BaseModel):
    """HTTP server settings."""
    model_config = {"frozen": True}

    port: str = "8080"
    static_dir: str = "static"
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL
    public_base_path: str = ""

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_string(cls, v):
        return "" if v is None else str(v)

    @field_validator("refresh_interval", mode="before")
    @classmethod
    def _default_refresh(cls, v):
        if v is None or int(v) <= 0:
            return DEFAULT_REFRESH_INTERVAL
        return v


class LoggingConfig(BaseModel):
    """Log sink settings. Empty filename means stdout."""
    model_config = {"frozen": True}

    level: str = "INFO"
    filename: str = ""
    max_size_mb: int = 100
    max_backups: int = 5
    max_age_days: int = 30


class TitlesConfig(BaseModel):
    """Dashboard titles."""
    model_config = {"frozen": True}

    main_title: str = ""
    prod_data_center: str = ""
    dr_data_center: str = ""


class LayoutConfig(BaseModel):
    model_config = {"frozen": True}

    columns: int = 2


class RefreshSlot(BaseModel):
    """Browser refresh interval for an hour range."""
    model_config = {"frozen": True}

    start_hour: int = Field(default=0, ge=0, le=24)
    end_hour: int = Field(default=24, ge=0, le=24)
    interval_ms: int = Field(default=DEFAULT_FRONTEND_INTERVAL_MS, gt=0)


class FrontendSettings(BaseModel):
    model_config = {"frozen": True}

    load_balancer_ip: str = ""
    refresh_intervals: List[RefreshSlot] = Field(default_factory=list)
    default_interval_ms: int = DEFAULT_FRONTEND_INTERVAL_MS

    @field_validator("default_interval_ms", mode="before")
    @classmethod
    def _default_interval(cls, v):
        if v is None or int(v) <= 0:
            return DEFAULT_FRONTEND_INTERVAL_MS
        return v


class AppConfig(BaseModel):
    """
    Complete configuration snapshot.

    Databases keep file order; the fleet snapshot preserves it.
    """
    model_config = {"frozen": True}

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    databases: List[DatabaseTarget] = Field(default_factory=list)
    titles: TitlesConfig = Field(default_factory=TitlesConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    frontend: FrontendSettings = Field(default_factory=FrontendSettings)

    @field_validator("databases", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return [] if v is None else v


__all__ = [
    "DatabaseTarget",
    "ServerConfig",
    "LoggingConfig",
    "TitlesConfig",
    "LayoutConfig",
    "RefreshSlot",
    "FrontendSettings",
    "AppConfig",
]
