# ============================================================================
# CLAUDE CONTEXT - CORE MODULE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors and models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.contracts import (
    UNKNOWN,
    ROLE_UNKNOWN,
    OPEN_MODE_READ_WRITE,
    InstanceKind,
    ProbeState,
)
from core.errors import ProbeError
from core.models import (
    AppConfig,
    DatabaseTarget,
    InstanceStatus,
    SystemStatus,
)

__all__ = [
    # Contracts
    "UNKNOWN",
    "ROLE_UNKNOWN",
    "OPEN_MODE_READ_WRITE",
    "InstanceKind",
    "ProbeState",
    # Errors
    "ProbeError",
    # Models
    "AppConfig",
    "DatabaseTarget",
    "InstanceStatus",
    "SystemStatus",
]
