# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Core - Evaluation layer
# PURPOSE: Fleet, system and instance status evaluation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Services Module

Evaluators coordinate the reachability prober and the Oracle probe
client into status records.

Usage:
    from services import FleetEvaluator

    evaluator = FleetEvaluator()
    snapshot = await evaluator.evaluate()
"""

from .evaluator import (
    InstanceEvaluator,
    SystemEvaluator,
    FleetEvaluator,
    merge_system_status,
)
from .mock_data import generate_mock_snapshot, mock_titles

__all__ = [
    "InstanceEvaluator",
    "SystemEvaluator",
    "FleetEvaluator",
    "merge_system_status",
    "generate_mock_snapshot",
    "mock_titles",
]
