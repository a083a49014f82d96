# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Network and database probes
# PURPOSE: Lowest probe layers; the only producers of probe errors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Infrastructure module for the DR dashboard.

Provides:
- probe_reachability / probe_port: ICMP and TCP liveness
- open_client / OracleProbeClient: short-lived Oracle probe sessions
- parse_lag: Data Guard interval literal parsing

Usage:
    from infrastructure import probe_reachability, open_client

    alive, err = await probe_reachability("10.10.1.10", timeout=3.0)

    async with open_client(config) as client:
        role, open_mode = await client.get_role_and_mode()
"""

from infrastructure.network import (
    probe_reachability,
    probe_port,
)
from infrastructure.oracle import (
    OracleProbeConfig,
    OracleProbeClient,
    build_dsn,
    open_client,
    check_connection,
)
from infrastructure.dataguard import parse_lag

__all__ = [
    # Network
    "probe_reachability",
    "probe_port",
    # Oracle
    "OracleProbeConfig",
    "OracleProbeClient",
    "build_dsn",
    "open_client",
    "check_connection",
    # Data Guard
    "parse_lag",
]
