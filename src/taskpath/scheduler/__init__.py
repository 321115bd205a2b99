"""Scheduler package - dependency graph and critical path calculation.

Main entry points:
- calculate_critical_path: IDs of zero-slack tasks
- analyze_schedule: full per-task timings (CriticalPathResult)
- get_dependency_connections: drawable blocks/depends edges

Configuration:
- CriticalPathConfig: slack epsilon and cycle policy
"""

from .config import CriticalPathConfig, CyclePolicy
from .core import CriticalPathResult, TaskNode
from .critical_path import (
    CriticalPathCalculator,
    analyze_schedule,
    calculate_critical_path,
    get_dependency_connections,
)
from .graph import build_task_nodes, find_cycles

__all__ = [
    # Core dataclasses
    "TaskNode",
    "CriticalPathResult",
    # Configuration
    "CriticalPathConfig",
    "CyclePolicy",
    # Calculation
    "CriticalPathCalculator",
    "analyze_schedule",
    "calculate_critical_path",
    "get_dependency_connections",
    # Graph helpers
    "build_task_nodes",
    "find_cycles",
]
