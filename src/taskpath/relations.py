"""Direction-aware helpers for listing a task's relations."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Relation, RelationType, Task

# (outgoing label, incoming label) per relation type
RELATION_LABELS: dict[RelationType, tuple[str, str]] = {
    RelationType.BLOCKS: ("Blocks", "Blocked by"),
    RelationType.DEPENDS: ("Depends on", "Depended on by"),
    RelationType.DUPLICATES: ("Duplicates", "Duplicates"),
    RelationType.RELATES: ("Relates to", "Relates to"),
}


def relation_label(relation: Relation, task_id: str) -> str:
    """Label a relation as seen from ``task_id``.

    Blocks and depends read differently depending on which end the task is;
    duplicates and relates are symmetric.
    """
    outgoing, incoming = RELATION_LABELS[relation.relation_type]
    return outgoing if relation.source_task_id == task_id else incoming


def related_task_id(relation: Relation, task_id: str) -> str:
    """ID of the task at the other end of the relation."""
    if relation.source_task_id == task_id:
        return relation.target_task_id
    return relation.source_task_id


def relations_for_task(task_id: str, relations: Iterable[Relation]) -> list[Relation]:
    """All relations where the task is either source or target."""
    return [
        rel for rel in relations if task_id in (rel.source_task_id, rel.target_task_id)
    ]


def relatable_tasks(
    task_id: str, tasks: Iterable[Task], relations: Sequence[Relation]
) -> list[Task]:
    """Tasks that can still be linked to ``task_id``.

    Excludes the task itself and any task already related to it in either
    direction, whatever the relation type.
    """
    related = {related_task_id(rel, task_id) for rel in relations_for_task(task_id, relations)}
    return [task for task in tasks if task.id != task_id and task.id not in related]
