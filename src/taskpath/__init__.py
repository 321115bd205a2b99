"""taskpath - task relation checks and critical path scheduling."""

from .models import (
    DependencyEdge,
    Relation,
    RelationType,
    RelationWarning,
    Snapshot,
    Task,
    TaskStatus,
    WarningKind,
)
from .relations import relatable_tasks, related_task_id, relation_label, relations_for_task
from .scheduler import analyze_schedule, calculate_critical_path, get_dependency_connections
from .validator import collect_warnings, get_warnings

__version__ = "0.1.0"

__all__ = [
    "DependencyEdge",
    "Relation",
    "RelationType",
    "RelationWarning",
    "Snapshot",
    "Task",
    "TaskStatus",
    "WarningKind",
    "analyze_schedule",
    "calculate_critical_path",
    "collect_warnings",
    "get_dependency_connections",
    "get_warnings",
    "relatable_tasks",
    "related_task_id",
    "relation_label",
    "relations_for_task",
]
