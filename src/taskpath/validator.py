"""Relation consistency checks for individual tasks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .logger import get_logger
from .models import Relation, RelationType, RelationWarning, Task, TaskStatus, WarningKind

logger = get_logger()


def get_warnings(
    task_id: str,
    task_status: TaskStatus | str,
    relations: Sequence[Relation],
    all_tasks: Iterable[Task],
) -> list[RelationWarning]:
    """Report dependency-consistency problems for one task.

    Findings are advisory and additive. They are emitted in a stable order:
    blocked-by checks first, then blocks checks, then depends checks, each
    following the order of ``relations``. Relations pointing at tasks missing
    from ``all_tasks`` are skipped.

    Args:
        task_id: Task being checked
        task_status: Current status of that task
        relations: All relations of the workspace
        all_tasks: All tasks of the workspace

    Returns:
        List of findings, possibly empty

    Raises:
        ValueError: If task_status is a string that is not a TaskStatus value
    """
    status = TaskStatus(task_status)
    # First task wins when ids repeat
    tasks_by_id: dict[str, Task] = {}
    for task in all_tasks:
        tasks_by_id.setdefault(task.id, task)
    warnings: list[RelationWarning] = []

    # Something blocks this task but is not finished
    for rel in relations:
        if rel.relation_type != RelationType.BLOCKS or rel.target_task_id != task_id:
            continue
        blocking = tasks_by_id.get(rel.source_task_id)
        if blocking is None:
            continue
        if blocking.status != TaskStatus.DONE and status.is_started:
            warnings.append(
                RelationWarning(
                    kind=WarningKind.ERROR,
                    message=f'Blocked by "{blocking.title}" ({blocking.status.value})',
                )
            )

    # This task blocks something that already moved on
    for rel in relations:
        if rel.relation_type != RelationType.BLOCKS or rel.source_task_id != task_id:
            continue
        blocked = tasks_by_id.get(rel.target_task_id)
        if blocked is None:
            continue
        if blocked.status.is_started and status != TaskStatus.DONE:
            warnings.append(
                RelationWarning(
                    kind=WarningKind.WARNING,
                    message=f'Blocks "{blocked.title}" which is already {blocked.status.value}',
                )
            )

    # Done while a dependency is unfinished
    for rel in relations:
        if rel.relation_type != RelationType.DEPENDS or rel.source_task_id != task_id:
            continue
        dependency = tasks_by_id.get(rel.target_task_id)
        if dependency is None:
            continue
        if dependency.status != TaskStatus.DONE and status == TaskStatus.DONE:
            warnings.append(
                RelationWarning(
                    kind=WarningKind.WARNING,
                    message=f'Depends on "{dependency.title}" ({dependency.status.value})',
                )
            )

    for warning in warnings:
        logger.checks(f"  {task_id}: [{warning.kind.value}] {warning.message}")

    return warnings


def collect_warnings(
    tasks: Sequence[Task],
    relations: Sequence[Relation],
) -> dict[str, list[RelationWarning]]:
    """Run get_warnings for every task, keeping only tasks with findings.

    The result preserves the order of ``tasks``.
    """
    findings: dict[str, list[RelationWarning]] = {}
    for task in tasks:
        logger.checks(f"Checking relations of {task.id}")
        task_warnings = get_warnings(task.id, task.status, relations, tasks)
        if task_warnings:
            findings[task.id] = task_warnings
    return findings
