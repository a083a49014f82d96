# ============================================================================
# CLAUDE CONTEXT - BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Foundation - Probe vocabulary shared by every layer
# PURPOSE: Instance kinds, terminal probe states, sentinels, Oracle strings
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: InstanceKind, ProbeState, UNKNOWN, ROLE_UNKNOWN, OPEN_MODE_READ_WRITE
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the Data Guard probing system.

Role and open-mode values reported by Oracle are NOT enumerated here.
They pass through the core as raw strings; any closed vocabulary or
translation belongs to the presentation layer.
"""

from enum import Enum


# ============================================================================
# SENTINELS
# ============================================================================

# Lag seconds / connection count that were never measured.
UNKNOWN = -1

# Role reported before (or without) a successful V$DATABASE read.
ROLE_UNKNOWN = "UNKNOWN"

# Open mode of a writable (primary) database.
OPEN_MODE_READ_WRITE = "READ WRITE"


# ============================================================================
# STATUS ENUMS
# ============================================================================

class InstanceKind(str, Enum):
    """
    Which side of a Data Guard pair an instance is probed as.

    Only PRODUCTION may surface an active connection count.
    """
    PRODUCTION = "Production"
    DISASTER_RECOVERY = "Disaster Recovery"


class ProbeState(str, Enum):
    """
    Terminal states of the layered instance probe.

    State transitions:
        CHECKING -> OFFLINE              (ping failed)
                 -> PORT_ERROR           (listener port closed)
                 -> DB_CONNECTION_ERROR  (connect/ping failed)
                 -> INFO_FETCH_FAILED    (V$DATABASE read failed)
                 -> PROBE_FAILED         (unexpected error before a state was known)
                 -> <raw open mode>      (e.g. READ WRITE, MOUNTED)
    """
    CHECKING = "CHECKING"
    OFFLINE = "OFFLINE"
    PORT_ERROR = "PORT_ERROR"
    DB_CONNECTION_ERROR = "DB_CONNECTION_ERROR"
    INFO_FETCH_FAILED = "INFO_FETCH_FAILED"
    PROBE_FAILED = "PROBE_FAILED"


__all__ = [
    "UNKNOWN",
    "ROLE_UNKNOWN",
    "OPEN_MODE_READ_WRITE",
    "InstanceKind",
    "ProbeState",
]
