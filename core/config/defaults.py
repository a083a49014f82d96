# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - Default probe timeouts
# PURPOSE: Centralized defaults for ping, port and database probes
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Timeouts for every suspension point of a probe. These are process-wide
settings read from the environment, separate from the per-database
config.yaml (which can be hot-reloaded).

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ProbeDefaults:
    """
    Defaults for the layered instance probe.

    Ping and port checks are hard-bounded by these timeouts. Database
    queries rely on the connection's call timeout.
    """
    # Reachability (seconds)
    ping_timeout: float = 3.0
    port_timeout: float = 3.0

    # Oracle session
    db_connect_timeout: float = 5.0  # TCP connect to the listener
    db_call_timeout_ms: int = 10000  # per round trip once connected

    @classmethod
    def from_env(cls) -> "ProbeDefaults":
        """Create from environment variables."""
        return cls(
            ping_timeout=float(os.getenv("PING_TIMEOUT_SEC", 3.0)),
            port_timeout=float(os.getenv("PORT_TIMEOUT_SEC", 3.0)),
            db_connect_timeout=float(os.getenv("DB_CONNECT_TIMEOUT_SEC", 5.0)),
            db_call_timeout_ms=int(os.getenv("DB_CALL_TIMEOUT_MS", 10000)),
        )


@dataclass(frozen=True)
class ServiceDefaults:
    """Defaults for the HTTP service around the probes."""
    config_file: str = "config.yaml"
    config_poll_interval: float = 2.0
    enable_mock_data: bool = False

    @classmethod
    def from_env(cls) -> "ServiceDefaults":
        """Create from environment variables."""
        return cls(
            config_file=os.getenv("CONFIG_FILE", "config.yaml"),
            config_poll_interval=float(os.getenv("CONFIG_POLL_INTERVAL", 2.0)),
            enable_mock_data=os.getenv("ENABLE_MOCK_DATA", "").lower() == "true",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    probes: ProbeDefaults = field(default_factory=ProbeDefaults)
    service: ServiceDefaults = field(default_factory=ServiceDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            probes=ProbeDefaults.from_env(),
            service=ServiceDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeDefaults",
    "ServiceDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
