# ============================================================================
# CLAUDE CONTEXT - STATUS MODELS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core model - Per-instance and per-system probe results
# PURPOSE: Carry probe outcomes from evaluators to the dashboard API
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: InstanceStatus, LoadBalancerStatus, SystemStatus
# DEPENDENCIES: pydantic, dataclasses
# ============================================================================
"""
Status Models

- InstanceStatus: transient result of probing one production or DR
  instance. Owned by the instance evaluator.
- LoadBalancerStatus: ping / port / DB-connect triple of the LB address.
- SystemStatus: merged record for one configured database. Field names
  are the JSON keys the dashboard consumes.

Lag seconds and connection counts use UNKNOWN (-1) for "not measured",
distinct from a genuine zero.
"""

from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, Field

from core.contracts import UNKNOWN, ROLE_UNKNOWN, ProbeState


@dataclass
class InstanceStatus:
    """
    Result of the layered probe of one instance.

    Once a stage fails, no later field is populated: the fields after
    the failing stage keep their defaults.
    """
    is_alive: bool = False
    port_open: bool = False
    db_connected: bool = False
    current_state: str = ProbeState.CHECKING.value
    role: str = ROLE_UNKNOWN
    dg_delay: int = UNKNOWN
    connections: int = UNKNOWN

    def terminate(self, state: ProbeState) -> "InstanceStatus":
        """Mark the probe as ended early in the given state."""
        self.current_state = state.value
        return self


@dataclass
class LoadBalancerStatus:
    """Reachability of the load balancer address."""
    alive: bool = False
    port_open: bool = False
    db_connect: bool = False


class SystemStatus(BaseModel):
    """
    Merged status of one configured Data Guard pair.

    `connections` is sourced only from the production instance.
    """
    name: str
    load_balancer_ip: str = ""
    load_balancer_alive: bool = False
    load_balancer_port_1521: bool = False
    load_balancer_db_connect: bool = False
    connections: int = Field(default=UNKNOWN, description="Active sessions on production")

    production_ip: str = ""
    production_alive: bool = False
    production_port_1521: bool = False
    production_db_connect: bool = False
    production_status: str = ProbeState.CHECKING.value
    production_role: str = ROLE_UNKNOWN
    production_dgdelay: int = Field(default=UNKNOWN, description="DG lag in seconds")

    disaster_ip: str = ""
    disaster_alive: bool = False
    disaster_port_1521: bool = False
    disaster_db_connect: bool = False
    disaster_status: str = ProbeState.CHECKING.value
    disaster_role: str = ROLE_UNKNOWN
    disaster_dgdelay: int = Field(default=UNKNOWN, description="DG lag in seconds")


FleetSnapshot = List[SystemStatus]


__all__ = [
    "InstanceStatus",
    "LoadBalancerStatus",
    "SystemStatus",
    "FleetSnapshot",
]
