# ============================================================================
# PROBE ERRORS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Foundation - Error taxonomy
# PURPOSE: Typed errors produced by the prober, probe client and lag parser
# CREATED: 18 OCT 2026
# ============================================================================
"""
Probe Errors

Only the lowest layers (reachability prober, Oracle probe client, lag
parser) produce these. The evaluators catch every one of them at their
boundary, log it, and fold it into a state string or sentinel value.

Hierarchy:
    ProbeError
    ├── ConfigurationError
    ├── ReachabilityError
    ├── PortError
    ├── ProbeConnectionError
    ├── LagFormatError
    └── QueryError
        ├── InfoFetchError
        ├── LagFetchError
        └── ConnectionCountError
"""

from typing import Optional


class ProbeError(Exception):
    """Base class for all probe failures."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.address = address


class ConfigurationError(ProbeError):
    """Configuration file unreadable or database target malformed."""


class ReachabilityError(ProbeError):
    """Ping could not run, timed out, or reported no reply."""


class PortError(ProbeError):
    """TCP connect to the listener port failed."""


class ProbeConnectionError(ProbeError):
    """Database connect, authentication or initial ping failed."""


class LagFormatError(ProbeError):
    """Data Guard interval literal is not '+DD HH:MI:SS'."""

    def __init__(self, message: str, fragment: str = ""):
        super().__init__(message)
        self.fragment = fragment


class QueryError(ProbeError):
    """A read-only probe query failed."""


class InfoFetchError(QueryError):
    """V$DATABASE role/open-mode read failed."""


class LagFetchError(QueryError):
    """V$DATAGUARD_STATS read or parse failed."""


class ConnectionCountError(QueryError):
    """V$SESSION active session count failed."""


__all__ = [
    "ProbeError",
    "ConfigurationError",
    "ReachabilityError",
    "PortError",
    "ProbeConnectionError",
    "LagFormatError",
    "QueryError",
    "InfoFetchError",
    "LagFetchError",
    "ConnectionCountError",
]
