"""Dependency graph construction and cycle detection."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from taskpath.logger import get_logger
from taskpath.models import Relation, Task

from .core import TaskNode

logger = get_logger()


def build_task_nodes(tasks: Iterable[Task], relations: Sequence[Relation]) -> dict[str, TaskNode]:
    """Build scheduling nodes for every task with both dates set.

    A node's dependencies are the sources of blocks/depends relations that
    target it, restricted to dated tasks. Both relation types mean "this task
    must follow that one". Self-relations are ignored.

    Returns:
        Nodes keyed by task ID, in task input order
    """
    nodes: dict[str, TaskNode] = {}
    for task in tasks:
        duration = task.duration_days
        if duration is None:
            logger.debug(f"  Skipping {task.id}: missing start or due date")
            continue
        nodes[task.id] = TaskNode(id=task.id, duration=duration, dependencies=[])

    for rel in relations:
        if not rel.relation_type.is_scheduling:
            continue
        if rel.source_task_id not in nodes or rel.target_task_id not in nodes:
            logger.debug(
                f"  Dropping {rel.relation_type.value} edge "
                f"{rel.source_task_id} -> {rel.target_task_id}: endpoint not scheduled"
            )
            continue
        if rel.is_self_relation:
            logger.debug(f"  Dropping self-relation on {rel.source_task_id}")
            continue
        dependencies = nodes[rel.target_task_id].dependencies
        if rel.source_task_id not in dependencies:
            dependencies.append(rel.source_task_id)

    return nodes


def build_dependents(nodes: dict[str, TaskNode]) -> dict[str, list[str]]:
    """Invert the dependency lists: task ID -> tasks that depend on it."""
    dependents: dict[str, list[str]] = {node_id: [] for node_id in nodes}
    for node in nodes.values():
        for dep_id in node.dependencies:
            dependents[dep_id].append(node.id)
    return dependents


def find_cycles(nodes: dict[str, TaskNode]) -> list[list[str]]:
    """Find groups of tasks that depend on each other in a cycle.

    Uses an iterative Tarjan strongly-connected-components search so deep
    chains do not hit the recursion limit.

    Returns:
        One list per cycle, members in task input order; empty for a DAG
    """
    order = {node_id: position for position, node_id in enumerate(nodes)}
    index_of: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    stack: list[str] = []
    on_stack: set[str] = set()
    cycles: list[list[str]] = []
    counter = 0

    for root in nodes:
        if root in index_of:
            continue

        index_of[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work = [(root, iter(nodes[root].dependencies))]

        while work:
            node_id, children = work[-1]
            advanced = False
            for child in children:
                if child not in index_of:
                    index_of[child] = lowlink[child] = counter
                    counter += 1
                    stack.append(child)
                    on_stack.add(child)
                    work.append((child, iter(nodes[child].dependencies)))
                    advanced = True
                    break
                if child in on_stack:
                    lowlink[node_id] = min(lowlink[node_id], index_of[child])
            if advanced:
                continue

            work.pop()
            if work:
                parent_id = work[-1][0]
                lowlink[parent_id] = min(lowlink[parent_id], lowlink[node_id])

            if lowlink[node_id] == index_of[node_id]:
                component: list[str] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node_id:
                        break
                if len(component) > 1:
                    cycles.append(sorted(component, key=order.__getitem__))

    cycles.sort(key=lambda cycle: order[cycle[0]])
    return cycles


def without_tasks(nodes: dict[str, TaskNode], excluded: set[str]) -> dict[str, TaskNode]:
    """Return a new node table with the excluded tasks and their edges removed."""
    return {
        node_id: TaskNode(
            id=node.id,
            duration=node.duration,
            dependencies=[dep_id for dep_id in node.dependencies if dep_id not in excluded],
        )
        for node_id, node in nodes.items()
        if node_id not in excluded
    }
