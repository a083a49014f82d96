# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Process-wide probe defaults (environment) and the hot-reloadable
config.yaml snapshot store.
"""

from core.config.defaults import (
    ProbeDefaults,
    ServiceDefaults,
    get_defaults,
    reset_defaults,
)
from core.config.store import (
    ConfigStore,
    ConfigWatcher,
    parse_config_file,
    get_config_store,
    reset_config_store,
)

__all__ = [
    "ProbeDefaults",
    "ServiceDefaults",
    "get_defaults",
    "reset_defaults",
    "ConfigStore",
    "ConfigWatcher",
    "parse_config_file",
    "get_config_store",
    "reset_config_store",
]
