# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Infrastructure - Self-check plugin registration
# PURPOSE: Name-keyed set of the dashboard's self-checks
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Registry

Checks register themselves on import of health.checks through the
@register_check() decorator; tests build private registries instead.
"""

import logging
from typing import Dict, List, Optional, Type

from health.core import HealthCheckPlugin

logger = logging.getLogger(__name__)


class HealthCheckRegistry:
    """Self-check instances keyed by name, listed in priority order."""

    def __init__(self):
        self._by_name: Dict[str, HealthCheckPlugin] = {}

    def register(self, check: HealthCheckPlugin) -> None:
        replaced = check.name in self._by_name
        self._by_name[check.name] = check
        logger.debug(
            f"{'Replaced' if replaced else 'Registered'} self-check {check.name} "
            f"[{check.category.value}/{check.priority}]"
        )

    def get(self, name: str) -> Optional[HealthCheckPlugin]:
        return self._by_name.get(name)

    def checks(self, required_only: bool = False) -> List[HealthCheckPlugin]:
        """
        Registered checks, lowest priority number first.

        Args:
            required_only: Only checks that gate /readyz
        """
        selected = (
            c for c in self._by_name.values()
            if c.required_for_ready or not required_only
        )
        return sorted(selected, key=lambda c: (c.priority, c.name))

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name


_registry: Optional[HealthCheckRegistry] = None


def get_registry() -> HealthCheckRegistry:
    """Process-wide registry used by the HTTP endpoints."""
    global _registry
    if _registry is None:
        _registry = HealthCheckRegistry()
    return _registry


def register_check(required_for_ready: Optional[bool] = None):
    """
    Class decorator: instantiate the check and add it to the global registry.

    Args:
        required_for_ready: Override the class default for /readyz gating
    """
    def decorator(cls: Type[HealthCheckPlugin]) -> Type[HealthCheckPlugin]:
        if required_for_ready is not None:
            cls.required_for_ready = required_for_ready
        get_registry().register(cls())
        return cls

    return decorator


__all__ = [
    "HealthCheckRegistry",
    "get_registry",
    "register_check",
]
